import markdown
from markdown.extensions import Extension
from markdown.extensions.toc import TocExtension
from markdown.treeprocessors import Treeprocessor


class TargetBlankTreeprocessor(Treeprocessor):
    def run(self, root):
        for link in root.iter("a"):
            if link.get("href") is not None:
                link.set("target", "_blank")


class TargetBlankExtension(Extension):
    """Open every rendered hyperlink in a new browsing context."""

    def extendMarkdown(self, md):
        # Must run after the inline processor (priority 20) has built the links
        md.treeprocessors.register(TargetBlankTreeprocessor(md), "target_blank", 5)


def _extensions() -> list:
    return [
        "extra",
        "sane_lists",
        "smarty",
        "pymdownx.magiclink",
        "pymdownx.tilde",
        TocExtension(),
        TargetBlankExtension(),
    ]


EXTENSION_CONFIGS = {
    # ~~text~~ only; a single tilde stays literal
    "pymdownx.tilde": {"subscript": False},
}


def render_markdown(source: bytes) -> bytes:
    """
    Convert raw markdown bytes to HTML bytes.
    A fresh Markdown instance is built per call so no state leaks between posts.
    """
    text = source.decode("utf-8", errors="replace")
    md = markdown.Markdown(
        extensions=_extensions(),
        extension_configs=EXTENSION_CONFIGS,
        output_format="html",
    )
    return md.convert(text).encode("utf-8")
