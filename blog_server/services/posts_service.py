import datetime
import logging
from pathlib import Path
from typing import Callable, List, Optional

from blog_server.schemas.post import Post
from blog_server.services.markdown_renderer import render_markdown

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSION = ".md"
HEADING_PREFIX = "# "
PREVIEW_MAX_LENGTH = 150
PREVIEW_ELLIPSIS = "..."

Renderer = Callable[[bytes], bytes]


class PostsService:
    def __init__(self, docs_dir, renderer: Renderer = render_markdown):
        self.docs_dir = Path(docs_dir)
        self.renderer = renderer

    def load_posts(self) -> List[Post]:
        """Scan the docs directory and return its posts, most recent first."""
        try:
            entries = sorted(self.docs_dir.iterdir())
        except OSError as e:
            logger.error(f"Error reading docs directory {self.docs_dir}: {e}")
            return []

        posts = []
        for path in entries:
            if not path.name.endswith(MARKDOWN_EXTENSION):
                continue
            try:
                raw = path.read_bytes()
                modified = path.stat().st_mtime
            except OSError as e:
                logger.error(f"Error reading file {path.name}: {e}")
                continue
            posts.append(parse_post_data(path, raw, modified, renderer=self.renderer))

        # Ties on modification time keep slug order
        posts.sort(key=lambda p: p.slug)
        posts.sort(key=lambda p: p.date, reverse=True)
        return posts

    def list_posts(self, limit: Optional[int] = None) -> List[Post]:
        posts = self.load_posts()
        if limit is not None and limit > 0:
            return posts[:limit]
        return posts

    def get_post(self, slug: str) -> Optional[Post]:
        return next((post for post in self.load_posts() if post.slug == slug), None)


def parse_post_data(
    path: Path, raw: bytes, modified: float, *, renderer: Renderer = render_markdown
) -> Post:
    """Derive a post from a markdown file's bytes and modification time."""
    lines = raw.decode("utf-8", errors="replace").split("\n")
    return Post(
        slug=_derive_slug(path),
        title=_derive_title(lines),
        content=renderer(raw).decode("utf-8"),
        date=_modified_at(modified),
        preview=_derive_preview(lines),
    )


def _derive_slug(path: Path) -> str:
    return path.name.removesuffix(MARKDOWN_EXTENSION)


def _derive_title(lines: List[str]) -> str:
    return lines[0].rstrip("\r").removeprefix(HEADING_PREFIX)


def _derive_preview(lines: List[str]) -> str:
    if len(lines) < 3:
        return ""
    preview = lines[2].strip()
    if len(preview) > PREVIEW_MAX_LENGTH:
        preview = preview[:PREVIEW_MAX_LENGTH] + PREVIEW_ELLIPSIS
    return preview


def _modified_at(timestamp: float) -> datetime.datetime:
    return datetime.datetime.fromtimestamp(timestamp, tz=datetime.timezone.utc)
