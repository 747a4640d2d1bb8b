"""Collaborator interfaces required by the video page renderer.

The renderer never reaches for global state. Everything it needs from the
hosting site (content records, attached files, URLs, page chrome and
localized strings) is passed in as one of the objects defined here.
"""

from abc import ABC, abstractmethod

from .models import AttachedFile, ContentItem, Course


def placeholder(key: str) -> str:
    """Return the marker a catalog yields for an untranslated key."""
    return f"[[{key}]]"


class ContentStore(ABC):
    """Source of content item records."""

    @abstractmethod
    def get_item(self, item_id: int) -> ContentItem:
        """Return the item with the given id.

        Raises:
            VideofileError: If the item does not exist.
        """
        ...


class FileStore(ABC):
    """Source of attached files."""

    @abstractmethod
    def list_files(self, context_id: int, category: str) -> list[AttachedFile]:
        """Return the files of one category, ordered by ``sort_key``.

        An empty category yields an empty list, never an error.
        """
        ...


class UrlBuilder(ABC):
    """Builds public URLs for attached files and static assets."""

    @abstractmethod
    def file_url(self, file: AttachedFile, category: str) -> str: ...

    @abstractmethod
    def asset_url(self, path: str) -> str: ...


class LocalizationCatalog(ABC):
    """Localized string lookup.

    Implementations return ``[[key]]`` from ``lookup()`` when the key has
    no translation.
    """

    @abstractmethod
    def lookup(self, key: str, namespace: str) -> str: ...

    def has(self, key: str, namespace: str) -> bool:
        """Return True if ``key`` has a translation in ``namespace``."""
        return self.lookup(key, namespace) != placeholder(key)


class PageShell(ABC):
    """Page chrome surrounding the rendered content.

    A shell collects page metadata (title, heading, required assets) before
    ``render_header()`` is called, and emits matching header and footer
    markup.
    """

    course: Course

    @abstractmethod
    def set_title(self, title: str) -> None:
        """Set the page title. ``title`` is plain text, escaped on output."""
        ...

    @abstractmethod
    def set_heading(self, heading: str) -> None:
        """Set the page heading. ``heading`` is plain text, escaped on output."""
        ...

    @abstractmethod
    def require_css(self, url: str) -> None: ...

    @abstractmethod
    def require_js(self, url: str) -> None: ...

    @abstractmethod
    def render_header(self) -> str: ...

    @abstractmethod
    def render_footer(self) -> str: ...

    @abstractmethod
    def render_heading(self, text: str, level: int = 2) -> str:
        """Return a heading element. ``text`` is plain text and is escaped."""
        ...

    @abstractmethod
    def render_box(
        self, content: str, classes: str = "generalbox", id: str | None = None
    ) -> str:
        """Return ``content`` (already HTML) wrapped in a box container."""
        ...

    @abstractmethod
    def format_string(self, text: str) -> str:
        """Normalize a plain-text string (names, titles).

        The result is still plain text: it is not escaped, since
        ``set_title()`` and ``render_heading()`` escape what they are given.
        """
        ...

    @abstractmethod
    def format_text(self, text: str) -> str:
        """Format rich text (descriptions) for output."""
        ...
