"""Blog backend: FastAPI service for blogs, comments, likes and JWT authentication."""
