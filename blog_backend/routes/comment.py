"""
Comment Routes.

Top-level comments are listed per blog; replies are listed per comment.
Only the author of a comment may edit or delete it, and deleting a comment
removes its replies.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from blog_backend.dependencies import (
    BlogRepoDep,
    CommentRepoDep,
    CurrentUserDep,
    PageQueryDep,
    ensure_owner,
    verify_read_access,
)
from blog_backend.managers import limiter
from blog_backend.repositories import CommentDetail, CommentPage, found_or_raise
from blog_backend.schemas.comment import (
    CommentCreate,
    CommentPageResponse,
    CommentResponse,
    CommentUpdate,
)
from blog_backend.schemas.user import AuthorResponse

router = APIRouter(
    prefix="/comment",
    tags=["💬 Comments"],
    dependencies=[Depends(verify_read_access)],
)

_NOT_FOUND = {
    404: {
        "description": "Not found",
        "content": {
            "application/json": {"example": {"detail": "Comment with ID <uuid> not found"}},
        },
    },
}


def comment_to_response(detail: CommentDetail) -> CommentResponse:
    comment = detail.comment
    return CommentResponse(
        id=comment.id,
        blog_id=comment.blog_id,
        parent_id=comment.parent_id,
        content=comment.content,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        user=AuthorResponse.model_validate(comment.author),
        reply_count=detail.reply_count,
    )


def page_to_response(result: CommentPage, page: int, limit: int) -> CommentPageResponse:
    return CommentPageResponse(
        page=page,
        limit=limit,
        page_count=result.page_count,
        comments=[comment_to_response(detail) for detail in result.comments],
    )


@router.post(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=CommentResponse,
    status_code=HTTP_201_CREATED,
    summary="Comment on a blog",
    description="Add a top-level comment, or a reply when `parentId` is given.",
    responses={**_NOT_FOUND},
    operation_id="comment_create",
)
@limiter.limit("30/minute")
async def create_comment(
    request: Request,
    response: Response,
    blog_id: UUID,
    comment: CommentCreate,
    repo: CommentRepoDep,
    current_user: CurrentUserDep,
) -> CommentResponse:
    """
    Add a comment to a blog.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for the rate limiter.
    blog_id : UUID
        Blog being commented on.
    comment : CommentCreate
        Comment payload.
    repo : CommentRepository
        Repository dependency.
    current_user : UserDB
        Authenticated author.

    Returns
    -------
    CommentResponse
        The stored comment.

    Raises
    ------
    RecordNotFoundError
        If the blog, or the parent comment on that blog, does not exist.
    """
    detail = found_or_raise(await repo.create_comment(current_user.id, blog_id, comment))
    return comment_to_response(detail)


@router.get(
    "/blog/{blog_id}",
    response_class=ORJSONResponse,
    response_model=CommentPageResponse,
    summary="List the comments of a blog",
    responses={**_NOT_FOUND},
    operation_id="comment_list_for_blog",
)
async def list_blog_comments(
    blog_id: UUID,
    pagination: PageQueryDep,
    repo: CommentRepoDep,
    blog_repo: BlogRepoDep,
) -> CommentPageResponse:
    found_or_raise(await blog_repo.get_blog_by_id(blog_id))
    result = await repo.get_blog_comments(blog_id, offset=pagination.offset, limit=pagination.limit)
    return page_to_response(result, pagination.page, pagination.limit)


@router.get(
    "/{comment_id}/replies",
    response_class=ORJSONResponse,
    response_model=CommentPageResponse,
    summary="List the replies to a comment",
    responses={**_NOT_FOUND},
    operation_id="comment_list_replies",
)
async def list_replies(
    comment_id: UUID,
    pagination: PageQueryDep,
    repo: CommentRepoDep,
) -> CommentPageResponse:
    found_or_raise(await repo.get_comment_by_id(comment_id))
    result = await repo.get_replies(comment_id, offset=pagination.offset, limit=pagination.limit)
    return page_to_response(result, pagination.page, pagination.limit)


@router.patch(
    "/{comment_id}",
    response_class=ORJSONResponse,
    response_model=CommentResponse,
    summary="Edit a comment",
    responses={**_NOT_FOUND},
    operation_id="comment_update",
)
async def update_comment(
    comment_id: UUID,
    comment: CommentUpdate,
    repo: CommentRepoDep,
    current_user: CurrentUserDep,
) -> CommentResponse:
    existing = found_or_raise(await repo.get_comment_by_id(comment_id))
    ensure_owner(existing.comment.user_id, current_user)
    return comment_to_response(found_or_raise(await repo.update_comment(comment_id, comment)))


@router.delete(
    "/{comment_id}",
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete a comment",
    description="Delete a comment together with its replies.",
    responses={**_NOT_FOUND},
    operation_id="comment_delete",
)
async def delete_comment(
    comment_id: UUID,
    repo: CommentRepoDep,
    current_user: CurrentUserDep,
) -> Response:
    existing = found_or_raise(await repo.get_comment_by_id(comment_id))
    ensure_owner(existing.comment.user_id, current_user)
    await repo.delete_comment(comment_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
