"""Search Routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response

from blog_backend.configs.settings import MAX_TITLE_LENGTH
from blog_backend.dependencies import BlogRepoDep, PageQueryDep, verify_read_access
from blog_backend.managers import limiter
from blog_backend.routes.blog import page_to_response
from blog_backend.schemas.blog import BlogPageResponse

router = APIRouter(
    prefix="/search",
    tags=["🔎 Search"],
    dependencies=[Depends(verify_read_access)],
)


@router.get(
    "/blog",
    response_class=ORJSONResponse,
    response_model=BlogPageResponse,
    summary="Search blogs by title",
    description="Blogs whose title contains `keyword`, newest first.",
    operation_id="search_blog",
)
@limiter.limit("30/minute")
async def search_blog(
    request: Request,
    response: Response,
    keyword: Annotated[
        str,
        Query(min_length=1, max_length=MAX_TITLE_LENGTH, description="Text to look for in titles"),
    ],
    pagination: PageQueryDep,
    repo: BlogRepoDep,
) -> BlogPageResponse:
    result = await repo.search_blog_by_title(
        keyword,
        offset=pagination.offset,
        limit=pagination.limit,
    )
    return page_to_response(result, pagination.page, pagination.limit)
