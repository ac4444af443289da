"""
Blog API Backend — Application Package Initializer
===================================================

What: Marks the `blog_api` directory as a Python package.
Who:  Used by uvicorn (`blog_api.main:app`), pytest, and the `blog-api` console script.

Architecture Note:
    The backend is split into thin layers:

    ┌─────────────────────────────────────┐
    │      Routes (Request Handlers)      │  ← status codes, JSON envelope
    ├─────────────────────────────────────┤
    │   Services (Persistence Adapter)    │  ← create / list / find / update / delete
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Connection)        │  ← one async engine per process
    └─────────────────────────────────────┘

    The Database and BlogService instances are built by the application
    factory (`blog_api.main.create_app`) and handed to the routes through
    FastAPI dependencies, so tests can swap in their own database.
"""

__version__ = "1.0.0"
