import os
from pathlib import Path
from typing import Optional

import pytest

from blog_server.settings import Settings

REPO_ROOT = Path(__file__).resolve().parent.parent
TEMPLATES_DIR = REPO_ROOT / "templates"

DAY = 24 * 60 * 60
BASE_TIME = 1_700_000_000


def write_post(
    docs_dir: Path, name: str, body: str, mtime: Optional[float] = None
) -> Path:
    """Write a markdown file, optionally pinning its modification time."""
    path = docs_dir / name
    path.write_text(body, encoding="utf-8")
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def docs_dir(tmp_path):
    path = tmp_path / "docs"
    path.mkdir()
    return path


@pytest.fixture
def public_dir(tmp_path):
    path = tmp_path / "public"
    path.mkdir()
    (path / "index.html").write_text("<h1>Home</h1>", encoding="utf-8")
    return path


@pytest.fixture
def settings(docs_dir, public_dir):
    return Settings(
        DOCS_DIR=str(docs_dir),
        TEMPLATES_DIR=str(TEMPLATES_DIR),
        PUBLIC_DIR=str(public_dir),
    )


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(self, posts=None):
        self.posts = posts or []
        self.limits = []

    def list_posts(self, limit=None):
        self.limits.append(limit)
        return self.posts[:limit] if limit else list(self.posts)

    def get_post(self, slug: str):
        return next((p for p in self.posts if p.slug == slug), None)
