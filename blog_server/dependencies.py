from fastapi import Depends, Request

from blog_server.services.posts_service import PostsService
from blog_server.settings import Settings
from blog_server.templating import TemplateEngine


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_template_engine(request: Request) -> TemplateEngine:
    return request.app.state.templates


def get_posts_service(settings: Settings = Depends(get_settings)):
    return PostsService(settings.docs_path)
