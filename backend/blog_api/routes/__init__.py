# Routes package init
"""
Blog API Backend — API Routes Package
======================================

Route Inventory:
    - blogs.py:   POST   /blogs        (create)
                  GET    /blogs        (list, newest first)
                  GET    /blogs/{id}   (detail)
                  PUT    /blogs/{id}   (full replace)
                  DELETE /blogs/{id}   (permanent delete)
    - pages.py:   GET    /             (static client page)
    - health.py:  GET    /health       (service health check)

Routes stay thin: extract path/body, call BlogService, build the envelope.
"""
