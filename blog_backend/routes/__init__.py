from blog_backend.routes.auth import router as auth_router
from blog_backend.routes.blog import router as blog_router
from blog_backend.routes.comment import router as comment_router
from blog_backend.routes.search import router as search_router
from blog_backend.routes.user import router as user_router

__all__ = [
    "auth_router",
    "blog_router",
    "comment_router",
    "search_router",
    "user_router",
]
