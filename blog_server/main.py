import argparse
import logging
from contextlib import asynccontextmanager
from typing import Optional, Sequence

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from blog_server.routers import greeting, posts
from blog_server.settings import Settings
from blog_server.templating import TemplateEngine, TemplateLoadError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info(f"Serving posts from {settings.docs_path}")

    try:
        yield
    finally:
        logger.info("Blog server exited gracefully")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application. Templates are compiled here, so a broken template
    set raises TemplateLoadError before anything is served.
    """
    settings = settings or Settings()

    app = FastAPI(
        title="Blog Server",
        description="Markdown posts rendered to HTML at request time",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.templates = TemplateEngine(settings.templates_path)

    app.include_router(greeting.router)
    app.include_router(posts.router)

    # Mounted last so the API routes take precedence over "/"
    if settings.public_path.is_dir():
        app.mount(
            "/",
            StaticFiles(directory=settings.public_path, html=True),
            name="public",
        )
    else:
        logger.warning(
            f"Public directory not found, static files disabled: {settings.public_path}"
        )

    return app


def parse_args(argv: Optional[Sequence[str]] = None, *, default_docs: str = "docs"):
    parser = argparse.ArgumentParser(
        description="Serve a directory of markdown posts as a blog."
    )
    parser.add_argument(
        "--docs",
        default=default_docs,
        help="path to directory containing markdown (.md) files",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    settings = Settings()
    args = parse_args(argv, default_docs=settings.DOCS_DIR)
    settings = settings.model_copy(update={"DOCS_DIR": args.docs})

    configure_logging(settings.LOG_LEVEL)

    try:
        app = create_app(settings)
    except TemplateLoadError as e:
        logger.critical(f"Error loading templates: {e}")
        raise SystemExit(1) from e

    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
