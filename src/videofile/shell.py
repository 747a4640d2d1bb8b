"""Minimal HTML page shell.

Provides the document chrome around a rendered video page: doctype,
``<head>`` with title and required assets, the page heading, and the
matching footer that closes everything ``render_header()`` opened.
"""

import re

from bs4 import BeautifulSoup

from .host import PageShell
from .models import Course

# Tags dropped from rich-text descriptions, together with their content.
_UNSAFE_TAGS = ["script", "style", "iframe", "object", "embed", "form"]

_WHITESPACE_RE = re.compile(r"\s+")


class HtmlPageShell(PageShell):
    """Page shell emitting a standalone HTML5 document.

    Args:
        course: Course the page belongs to.
    """

    def __init__(self, course: Course):
        self.course = course
        self.title = ""
        self.heading = ""
        self.stylesheets: list[str] = []
        self.scripts: list[str] = []

    def set_title(self, title: str) -> None:
        self.title = title

    def set_heading(self, heading: str) -> None:
        self.heading = heading

    def require_css(self, url: str) -> None:
        if url and url not in self.stylesheets:
            self.stylesheets.append(url)

    def require_js(self, url: str) -> None:
        if url and url not in self.scripts:
            self.scripts.append(url)

    def render_header(self) -> str:
        assets = "".join(
            f'\n  <link rel="stylesheet" href="{_html_escape(url)}">'
            for url in self.stylesheets
        )
        assets += "".join(
            f'\n  <script src="{_html_escape(url)}"></script>' for url in self.scripts
        )
        return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{_html_escape(self.title)}</title>{assets}
</head>
<body>
<div id="page">
<header id="page-header"><h1>{_html_escape(self.heading)}</h1></header>
<div id="region-main" role="main">
"""

    def render_footer(self) -> str:
        return """</div>
<footer id="page-footer"></footer>
</div>
</body>
</html>
"""

    def render_heading(self, text: str, level: int = 2) -> str:
        level = min(max(int(level), 1), 6)
        return f"<h{level}>{_html_escape(text)}</h{level}>"

    def render_box(
        self, content: str, classes: str = "generalbox", id: str | None = None
    ) -> str:
        id_attr = f' id="{_html_escape(id)}"' if id else ""
        return f'<div class="box {_html_escape(classes)}"{id_attr}>{content}</div>'

    def format_string(self, text: str) -> str:
        """Collapse whitespace in a plain-text string.

        The result is still plain text; escaping happens where it is
        written into markup.
        """
        return _WHITESPACE_RE.sub(" ", text).strip()

    def format_text(self, text: str) -> str:
        """Clean rich-text HTML for output.

        Drops script-capable elements, ``on*`` event handler attributes and
        ``javascript:`` links; everything else passes through.
        """
        soup = BeautifulSoup(text, "html.parser")

        for tag in soup.find_all(_UNSAFE_TAGS):
            tag.decompose()

        for tag in soup.find_all(True):
            for attr in list(tag.attrs):
                value = tag.attrs[attr]
                if attr.lower().startswith("on"):
                    del tag.attrs[attr]
                elif (
                    attr.lower() in ("href", "src")
                    and isinstance(value, str)
                    and value.strip().lower().startswith("javascript:")
                ):
                    del tag.attrs[attr]

        return str(soup)


def _html_escape(s: str) -> str:
    """Escape a string for HTML text and attribute values."""
    return (
        s.replace("&", "&amp;")
        .replace('"', "&quot;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )
