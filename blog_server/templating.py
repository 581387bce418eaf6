import io
import logging
from pathlib import Path
from typing import Dict, List, Union

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateError,
    select_autoescape,
)

from blog_server.schemas.post import Post

logger = logging.getLogger(__name__)

TemplateData = Union[Post, List[Post]]


class TemplateLoadError(RuntimeError):
    """Raised when the template set cannot be loaded; the server must not start."""


class TemplateEngine:
    """
    Compiles every template matching ``pattern`` once, up front.
    Rendering streams into a writer and never raises.
    """

    def __init__(self, templates_dir, pattern: str = "*.html"):
        self.templates_dir = Path(templates_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
        )
        self._templates = self._load(pattern)

    @property
    def names(self) -> List[str]:
        return list(self._templates)

    def _load(self, pattern: str) -> Dict[str, Template]:
        if not self.templates_dir.is_dir():
            raise TemplateLoadError(
                f"Templates directory not found: {self.templates_dir}"
            )

        paths = sorted(self.templates_dir.glob(pattern))
        if not paths:
            raise TemplateLoadError(
                f"No templates matching {pattern} in {self.templates_dir}"
            )

        templates = {}
        for path in paths:
            try:
                templates[path.name] = self.env.get_template(path.name)
            except (TemplateError, OSError) as e:
                raise TemplateLoadError(f"Error loading template {path.name}: {e}") from e
        logger.info(f"Loaded {len(templates)} templates from {self.templates_dir}")
        return templates

    def render_into(self, writer, name: str, data: TemplateData) -> bool:
        """
        Write the rendered template to ``writer`` chunk by chunk.
        On failure the error is logged and whatever was already written stays.
        """
        template = self._templates.get(name)
        if template is None:
            logger.error(f"Error executing template: {name} is not loaded")
            return False

        context = {"posts": data} if isinstance(data, list) else {"post": data}
        try:
            for chunk in template.generate(**context):
                writer.write(chunk)
        except Exception as e:
            logger.error(f"Error executing template {name}: {e}")
            return False
        return True

    def render(self, name: str, data: TemplateData) -> str:
        buffer = io.StringIO()
        self.render_into(buffer, name, data)
        return buffer.getvalue()
