"""
User Routes.

Profiles are public (subject to the read gate); only the signed-in user can
change or delete their own account. Deleting an account also removes the
user's blogs, comments and likes and clears the auth cookie.
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_204_NO_CONTENT

from blog_backend.dependencies import (
    BlogRepoDep,
    CurrentUserDep,
    PageQueryDep,
    UserRepoDep,
    verify_read_access,
)
from blog_backend.errors.database import RecordNotFoundError
from blog_backend.routes.blog import page_to_response
from blog_backend.schemas.blog import BlogPageResponse
from blog_backend.schemas.user import UserResponse, UserUpdate
from blog_backend.utils.cookies import clear_auth_cookie

router = APIRouter(
    prefix="/user",
    tags=["👤 Users"],
    dependencies=[Depends(verify_read_access)],
)


@router.get(
    "/me",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    summary="Get the current user",
    operation_id="user_me",
)
async def get_me(current_user: CurrentUserDep) -> UserResponse:
    return UserResponse.model_validate(current_user)


@router.patch(
    "/me",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    summary="Update the current user's profile",
    operation_id="user_update_me",
)
async def update_me(
    payload: UserUpdate,
    repo: UserRepoDep,
    current_user: CurrentUserDep,
) -> UserResponse:
    """
    Update profile fields of the signed-in user.

    Parameters
    ----------
    payload : UserUpdate
        Fields to change; omitted fields stay as they are.
    repo : UserRepository
        Repository dependency.
    current_user : UserDB
        Authenticated user.

    Returns
    -------
    UserResponse
        Updated profile.
    """
    user = await repo.update(current_user.id, payload)
    if user is None:
        raise RecordNotFoundError(detail=f"User with ID {current_user.id} not found")
    return UserResponse.model_validate(user)


@router.delete(
    "/me",
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete the current user's account",
    operation_id="user_delete_me",
)
async def delete_me(repo: UserRepoDep, current_user: CurrentUserDep) -> Response:
    await repo.delete(current_user.id)
    response = Response(status_code=HTTP_204_NO_CONTENT)
    clear_auth_cookie(response)
    return response


@router.get(
    "/{user_id}",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    summary="Get a user's profile",
    responses={
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"detail": "User with ID <uuid> not found"}}},
        },
    },
    operation_id="user_get_by_id",
)
async def get_user(user_id: UUID, repo: UserRepoDep) -> UserResponse:
    user = await repo.get_by_id(user_id)
    if user is None:
        raise RecordNotFoundError(detail=f"User with ID {user_id} not found")
    return UserResponse.model_validate(user)


@router.get(
    "/{user_id}/blogs",
    response_class=ORJSONResponse,
    response_model=BlogPageResponse,
    summary="List a user's blogs",
    operation_id="user_blogs",
)
async def get_user_blogs(
    user_id: UUID,
    pagination: PageQueryDep,
    user_repo: UserRepoDep,
    blog_repo: BlogRepoDep,
) -> BlogPageResponse:
    if await user_repo.get_by_id(user_id) is None:
        raise RecordNotFoundError(detail=f"User with ID {user_id} not found")
    result = await blog_repo.get_user_blogs(
        user_id,
        offset=pagination.offset,
        limit=pagination.limit,
    )
    return page_to_response(result, pagination.page, pagination.limit)
