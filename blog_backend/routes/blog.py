"""
Blog Routes.

Summary
-------
Endpoints include:
  - Create blog
  - List blogs
  - Get blog by id
  - Update blog (owner only)
  - Delete blog (owner only)
  - Toggle like

Reads are gated by `verify_read_access` at router level; every write needs
an authenticated user regardless of that setting.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from blog_backend.dependencies import (
    BlogRepoDep,
    CurrentUserDep,
    PageQueryDep,
    ensure_owner,
    verify_read_access,
)
from blog_backend.managers import limiter
from blog_backend.repositories import BlogDetail, BlogPage, found_or_raise
from blog_backend.schemas.blog import (
    BlogCreate,
    BlogPageResponse,
    BlogResponse,
    BlogUpdate,
    LikeResponse,
    LikeToggleResponse,
)
from blog_backend.schemas.user import AuthorResponse

router = APIRouter(
    prefix="/blog",
    tags=["📝 Blogs"],
    dependencies=[Depends(verify_read_access)],
)

_NOT_FOUND = {
    404: {
        "description": "Not found",
        "content": {"application/json": {"example": {"detail": "Blog with ID <uuid> not found"}}},
    },
}
_FORBIDDEN = {
    403: {
        "description": "Forbidden",
        "content": {
            "application/json": {
                "example": {"detail": "You do not have permission to modify this resource"},
            },
        },
    },
}


def blog_to_response(detail: BlogDetail) -> BlogResponse:
    """
    Convert a `BlogDetail` into the public `BlogResponse`.

    Parameters
    ----------
    detail : BlogDetail
        Blog with author and likes loaded.

    Returns
    -------
    BlogResponse
        Validated response model.
    """
    blog = detail.blog
    return BlogResponse(
        id=blog.id,
        title=blog.title,
        content=blog.content,
        cover_image=blog.cover_image,
        created_at=blog.created_at,
        updated_at=blog.updated_at,
        user=AuthorResponse.model_validate(blog.author),
        likes=[LikeResponse.model_validate(like) for like in blog.likes],
        comment_count=detail.comment_count,
    )


def page_to_response(result: BlogPage, page: int, limit: int) -> BlogPageResponse:
    return BlogPageResponse(
        page=page,
        limit=limit,
        page_count=result.page_count,
        blogs=[blog_to_response(detail) for detail in result.blogs],
    )


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a new blog",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "id": "550e8400-e29b-41d4-a716-446655440000",
                        "title": "Weekend in Lisbon",
                        "content": "Three days, two neighbourhoods, one tram...",
                        "coverImage": "uploads/covers/lisbon.jpg",
                        "createdAt": "2025-01-01T10:00:00Z",
                        "updatedAt": None,
                        "user": {
                            "id": "123e4567-e89b-12d3-a456-426614174000",
                            "name": "Jane Doe",
                            "profileImage": None,
                        },
                        "likes": [],
                        "commentCount": 0,
                    },
                },
            },
        },
    },
    operation_id="blog_create",
)
@limiter.limit("20/minute")
async def create_blog(
    request: Request,
    response: Response,
    blog: Annotated[
        BlogCreate,
        Body(
            examples=[
                {
                    "title": "Weekend in Lisbon",
                    "content": "Three days, two neighbourhoods, one tram...",
                    "coverImage": "uploads/covers/lisbon.jpg",
                },
            ],
        ),
    ],
    repo: BlogRepoDep,
    current_user: CurrentUserDep,
) -> BlogResponse:
    """
    Create a blog owned by the current user.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for the rate limiter.
    blog : BlogCreate
        Blog input payload.
    repo : BlogRepository
        Repository dependency.
    current_user : UserDB
        Authenticated author.

    Returns
    -------
    BlogResponse
        Created blog data.
    """
    detail = found_or_raise(await repo.create_blog(current_user.id, blog))
    return blog_to_response(detail)


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=BlogPageResponse,
    summary="List blogs",
    description="Blogs newest first, one page at a time.",
    operation_id="blog_list",
)
async def list_blogs(pagination: PageQueryDep, repo: BlogRepoDep) -> BlogPageResponse:
    result = await repo.get_blogs(offset=pagination.offset, limit=pagination.limit)
    return page_to_response(result, pagination.page, pagination.limit)


@router.get(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Get blog by ID",
    responses={**_NOT_FOUND},
    operation_id="blog_get_by_id",
)
async def get_blog(blog_id: UUID, repo: BlogRepoDep) -> BlogResponse:
    return blog_to_response(found_or_raise(await repo.get_blog_by_id(blog_id)))


@router.patch(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Update a blog",
    description="Partially update a blog. Replacing the cover image removes the old file.",
    responses={**_NOT_FOUND, **_FORBIDDEN},
    operation_id="blog_update",
)
async def update_blog(
    blog_id: UUID,
    blog: BlogUpdate,
    repo: BlogRepoDep,
    current_user: CurrentUserDep,
) -> BlogResponse:
    """
    Update a blog owned by the current user.

    Parameters
    ----------
    blog_id : UUID
        Blog identifier.
    blog : BlogUpdate
        Fields to change.
    repo : BlogRepository
        Repository dependency.
    current_user : UserDB
        Authenticated user; must be the author.

    Returns
    -------
    BlogResponse
        Updated blog data.

    Raises
    ------
    RecordNotFoundError
        If the blog does not exist.
    PermissionDeniedError
        If the current user is not the author.
    """
    existing = found_or_raise(await repo.get_blog_by_id(blog_id))
    ensure_owner(existing.blog.user_id, current_user)
    return blog_to_response(found_or_raise(await repo.update_blog(blog_id, blog)))


@router.delete(
    "/{blog_id}",
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete a blog",
    description="Delete a blog with its comments and likes, and remove its cover image.",
    responses={**_NOT_FOUND, **_FORBIDDEN},
    operation_id="blog_delete",
)
async def delete_blog(
    blog_id: UUID,
    repo: BlogRepoDep,
    current_user: CurrentUserDep,
) -> Response:
    existing = found_or_raise(await repo.get_blog_by_id(blog_id))
    ensure_owner(existing.blog.user_id, current_user)
    await repo.delete_blog(blog_id)
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.put(
    "/{blog_id}/like",
    response_class=ORJSONResponse,
    response_model=LikeToggleResponse,
    summary="Like or unlike a blog",
    description="Adds the current user's like, or removes it if it already exists.",
    responses={
        **_NOT_FOUND,
        409: {
            "description": "Conflict",
            "content": {
                "application/json": {"example": {"detail": "Blog is already liked by this user"}},
            },
        },
    },
    operation_id="blog_toggle_like",
)
@limiter.limit("60/minute")
async def toggle_like(
    request: Request,
    response: Response,
    blog_id: UUID,
    repo: BlogRepoDep,
    current_user: CurrentUserDep,
) -> LikeToggleResponse:
    found_or_raise(await repo.get_blog_by_id(blog_id))
    toggle = await repo.update_blog_like(current_user.id, blog_id)
    return LikeToggleResponse(blog_id=blog_id, liked=toggle.created)
