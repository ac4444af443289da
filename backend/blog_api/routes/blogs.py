"""
Blog API Backend — Blog Route Handlers
=======================================

What:  The five CRUD endpoints under /blogs.
How:   Each handler validates, calls BlogService, and wraps the outcome in
       the response envelope. Failures are raised as BlogApiError
       subclasses and shaped by the global exception handlers in main.py.

Check order (preserved exactly):
    GET/DELETE /blogs/{id}:  id format (400) → record exists (404)
    PUT /blogs/{id}:         id format (400) → title (400) → body (400) → exists (404)
    POST /blogs:             title (400) → body (400)

    The id format is checked before the store is queried so that a
    malformed id is a 400, never a 404.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from blog_api.dependencies import get_blog_service
from blog_api.exceptions import NotFoundError
from blog_api.schemas.blog import (
    BlogEnvelope,
    BlogInput,
    BlogListEnvelope,
    ErrorEnvelope,
    parse_blog_id,
    validate_blog_fields,
)
from blog_api.services.blog_service import BlogService

router = APIRouter(prefix="/blogs", tags=["Blogs"])

_ERRORS_400 = {400: {"description": "Validation failed or invalid ID", "model": ErrorEnvelope}}
_ERRORS_404 = {404: {"description": "Blog post not found", "model": ErrorEnvelope}}
_ERRORS_500 = {500: {"description": "Server error", "model": ErrorEnvelope}}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=BlogEnvelope,
    response_model_exclude_none=True,
    responses={**_ERRORS_400, **_ERRORS_500},
    summary="Create a blog post",
)
async def create_blog(
    payload: Optional[BlogInput] = Body(default=None),
    service: BlogService = Depends(get_blog_service),
) -> BlogEnvelope:
    """
    Create a post from `{title, body, author?}`.

    author defaults to "Anonymous" when absent or blank.
    """
    fields = validate_blog_fields(payload or BlogInput())
    blog = await service.create(fields)
    return BlogEnvelope(message="Blog post created successfully", data=blog)


@router.get(
    "",
    response_model=BlogListEnvelope,
    response_model_exclude_none=True,
    responses=_ERRORS_500,
    summary="List every blog post, newest first",
)
async def list_blogs(
    service: BlogService = Depends(get_blog_service),
) -> BlogListEnvelope:
    blogs = await service.list_all()
    return BlogListEnvelope(
        message="Blogs retrieved successfully",
        count=len(blogs),
        data=blogs,
    )


@router.get(
    "/{blog_id}",
    response_model=BlogEnvelope,
    response_model_exclude_none=True,
    responses={**_ERRORS_400, **_ERRORS_404, **_ERRORS_500},
    summary="Get a single blog post",
)
async def get_blog(
    blog_id: str,
    service: BlogService = Depends(get_blog_service),
) -> BlogEnvelope:
    blog_id = parse_blog_id(blog_id)
    blog = await service.find_by_id(blog_id)
    if blog is None:
        raise NotFoundError(resource_id=blog_id)
    return BlogEnvelope(message="Blog retrieved successfully", data=blog)


@router.put(
    "/{blog_id}",
    response_model=BlogEnvelope,
    response_model_exclude_none=True,
    responses={**_ERRORS_400, **_ERRORS_404, **_ERRORS_500},
    summary="Replace a blog post",
)
async def update_blog(
    blog_id: str,
    payload: Optional[BlogInput] = Body(default=None),
    service: BlogService = Depends(get_blog_service),
) -> BlogEnvelope:
    """
    Full replace of title, body and author; callers resend all three.

    author gets the same "Anonymous" default as on create.
    """
    blog_id = parse_blog_id(blog_id)
    fields = validate_blog_fields(payload or BlogInput())
    blog = await service.update_by_id(blog_id, fields)
    if blog is None:
        raise NotFoundError(resource_id=blog_id)
    return BlogEnvelope(message="Blog post updated successfully", data=blog)


@router.delete(
    "/{blog_id}",
    response_model=BlogEnvelope,
    response_model_exclude_none=True,
    responses={**_ERRORS_400, **_ERRORS_404, **_ERRORS_500},
    summary="Delete a blog post",
)
async def delete_blog(
    blog_id: str,
    service: BlogService = Depends(get_blog_service),
) -> BlogEnvelope:
    """Permanently remove a post; the response carries its last state."""
    blog_id = parse_blog_id(blog_id)
    blog = await service.delete_by_id(blog_id)
    if blog is None:
        raise NotFoundError(resource_id=blog_id)
    return BlogEnvelope(message="Blog post deleted successfully", data=blog)
