import io
import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse, PlainTextResponse

from blog_server import dependencies as deps
from blog_server.services.posts_service import PostsService
from blog_server.templating import TemplateEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

NO_POSTS_PLACEHOLDER = "<p>No posts available yet.</p>"
POST_CARD_TEMPLATE = "post-card.html"
POST_TEMPLATE = "post.html"
NOT_FOUND_BODY = "404 page not found"
LIMIT_RE = re.compile(r"[+-]?[0-9]+")


@router.get("/posts", response_class=HTMLResponse)
def list_posts(
    limit: Optional[str] = None,
    service: PostsService = Depends(deps.get_posts_service),
    templates: TemplateEngine = Depends(deps.get_template_engine),
):
    """Render posts, newest first, as concatenated post-card fragments."""
    try:
        posts = service.list_posts(_parse_limit(limit))
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")

    if not posts:
        return HTMLResponse(NO_POSTS_PLACEHOLDER)

    html = io.StringIO()
    for post in posts:
        templates.render_into(html, POST_CARD_TEMPLATE, post)
    return HTMLResponse(html.getvalue())


@router.get("/post/{slug:path}", response_class=HTMLResponse)
def get_post(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
    templates: TemplateEngine = Depends(deps.get_template_engine),
):
    """Render a single post page by slug."""
    try:
        post = service.get_post(slug)
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")

    if post is None:
        return PlainTextResponse(NOT_FOUND_BODY, status_code=404)
    return HTMLResponse(templates.render(POST_TEMPLATE, post))


def _parse_limit(value: Optional[str]) -> Optional[int]:
    """Positive integers limit the listing; anything else means no limit."""
    if value is None or not LIMIT_RE.fullmatch(value):
        return None
    limit = int(value)
    return limit if limit > 0 else None
