from blog_backend.dependencies.dependencies import (
    AuthServiceDep,
    BlogRepoDep,
    CommentRepoDep,
    CurrentUserDep,
    PageQuery,
    PageQueryDep,
    SessionDep,
    StorageDep,
    UserRepoDep,
    ensure_owner,
    get_access_token,
    get_auth_service,
    get_blog_repository,
    get_comment_repository,
    get_current_user,
    get_optional_user,
    get_page_query,
    get_storage,
    get_user_repository,
    verify_read_access,
)

__all__ = [
    "AuthServiceDep",
    "BlogRepoDep",
    "CommentRepoDep",
    "CurrentUserDep",
    "PageQuery",
    "PageQueryDep",
    "SessionDep",
    "StorageDep",
    "UserRepoDep",
    "ensure_owner",
    "get_access_token",
    "get_auth_service",
    "get_blog_repository",
    "get_comment_repository",
    "get_current_user",
    "get_optional_user",
    "get_page_query",
    "get_storage",
    "get_user_repository",
    "verify_read_access",
]
