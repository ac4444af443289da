"""
Dependency wiring for the FastAPI app.

The Database and BlogService are constructed once by `create_app` and kept
on `app.state`; these functions hand them to route handlers via Depends().
"""

from fastapi import Request

from blog_api.database import Database
from blog_api.services.blog_service import BlogService


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_blog_service(request: Request) -> BlogService:
    return request.app.state.blog_service
