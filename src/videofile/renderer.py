"""Video page rendering.

``VideoPageRenderer`` composes the page for one content item: the page
header with the item's name and description, an HTML5 ``<video>`` player
with poster, sources and caption tracks, and the page footer. All site
services come in through the collaborator objects passed to the
constructor (see ``videofile.host``).
"""

import logging
import re

from bs4 import BeautifulSoup

from .config import PlayerConfig
from .host import ContentStore, FileStore, LocalizationCatalog, PageShell, UrlBuilder
from .models import CAPTIONS, POSTERS, VIDEOS, ContentItem, VideofileError

logger = logging.getLogger(__name__)

# Catalog namespace holding ISO 639-2 language names
ISO_6392_NAMESPACE = "iso6392"

_LANGUAGE_CODE_RE = re.compile(r"[a-z]{3}")


def caption_label(filename: str, catalog: LocalizationCatalog) -> str:
    """Derive the label of a caption track from its filename.

    The label is the filename without its extension. When that is a
    three-letter ISO 639-2 code (``eng``, ``swe``) with a translation in
    the catalog, the language name is used instead.

    Args:
        filename: Caption filename, e.g. "eng.vtt".
        catalog: Catalog to look language names up in.

    Returns:
        Label for the track.
    """
    dot = filename.rfind(".")
    label = filename[:dot] if dot > 0 else filename

    if _LANGUAGE_CODE_RE.fullmatch(label) and catalog.has(label, ISO_6392_NAMESPACE):
        maybe_label = catalog.lookup(label, ISO_6392_NAMESPACE)
        # Untranslated strings come back as [[key]]; a translation that is
        # itself fully bracketed is still accepted.
        if not maybe_label.startswith("[[") or maybe_label.endswith("]]"):
            label = maybe_label

    return label


class VideoPageRenderer:
    """Renders the playback page of a video content item.

    Args:
        files: Store listing the item's posters, videos and captions.
        urls: Builder for file and asset URLs.
        shell: Page chrome (title, heading, header and footer).
        catalog: Localized strings, used for caption labels.
        content: Optional content store, needed only by ``render_item()``.
        player: Player settings. Defaults to ``PlayerConfig()``.
    """

    def __init__(
        self,
        files: FileStore,
        urls: UrlBuilder,
        shell: PageShell,
        catalog: LocalizationCatalog,
        content: ContentStore | None = None,
        player: PlayerConfig | None = None,
    ):
        self.files = files
        self.urls = urls
        self.shell = shell
        self.catalog = catalog
        self.content = content
        self.player = player or PlayerConfig()

    def render_item(self, item_id: int) -> str:
        """Fetch an item from the content store and render its page.

        Raises:
            VideofileError: If no content store is configured.
        """
        if self.content is None:
            raise VideofileError("No content store configured")
        return self.render_page(self.content.get_item(item_id))

    def render_page(self, item: ContentItem, context_id: int | None = None) -> str:
        """Render the complete page: header, player, footer.

        Args:
            item: Content item to render.
            context_id: Context holding the item's files. Defaults to
                ``item.context_id``.

        Returns:
            The page HTML.
        """
        if context_id is None:
            context_id = item.context_id

        output = ""
        output += self.render_header(item)
        output += self.render_player(item, context_id)
        output += self.render_footer()
        return output

    def render_header(self, item: ContentItem) -> str:
        """Set up page metadata and render the header, heading and description."""
        name = self.shell.format_string(item.name)
        course = self.shell.course

        if self.player.css_url:
            self.shell.require_css(self.urls.asset_url(self.player.css_url))
        if self.player.js_url:
            self.shell.require_js(self.urls.asset_url(self.player.js_url))

        self.shell.set_title(f"{course.short_name}: {name}")
        self.shell.set_heading(course.full_name)

        output = ""
        output += self.shell.render_header()
        output += self.shell.render_heading(name, 3)

        if item.description:
            output += self.shell.render_box(
                self.shell.format_text(item.description),
                "generalbox boxaligncenter",
                "intro",
            )

        return output

    def render_footer(self) -> str:
        return self.shell.render_footer()

    def render_player(self, item: ContentItem, context_id: int) -> str:
        """Render the video player for an item.

        Args:
            item: Content item (id and dimensions are used).
            context_id: Context holding the item's files.

        Returns:
            HTML of the player container.
        """
        soup = BeautifulSoup("", "html.parser")
        container = soup.new_tag("div", attrs={"class": "videofile"})

        video = soup.new_tag(
            "video",
            attrs={
                "id": f"videofile-{item.id}",
                "class": self.player.css_class,
                "controls": "controls",
                "preload": self.player.preload,
                "width": str(item.width),
                "height": str(item.height),
                "poster": self._poster_url(context_id),
                "data-setup": "{}",
            },
        )
        container.append(video)

        for file in self.files.list_files(context_id, VIDEOS):
            if not file.mimetype:
                logger.debug("Skipping video without MIME type: %s", file.filename)
                continue
            video.append(
                soup.new_tag(
                    "source",
                    attrs={
                        "src": self.urls.file_url(file, VIDEOS),
                        "type": file.mimetype,
                    },
                )
            )

        first = True
        for file in self.files.list_files(context_id, CAPTIONS):
            if not file.mimetype:
                logger.debug("Skipping caption without MIME type: %s", file.filename)
                continue

            track = soup.new_tag(
                "track",
                attrs={
                    "kind": "captions",
                    "src": self.urls.file_url(file, CAPTIONS),
                    "label": caption_label(file.filename, self.catalog),
                },
            )
            if first:
                track["default"] = "default"
                first = False
            video.append(track)

        return str(container)

    def _poster_url(self, context_id: int) -> str:
        """Return the URL of the first poster, or the default poster."""
        posters = self.files.list_files(context_id, POSTERS)
        if posters:
            return self.urls.file_url(posters[0], POSTERS)

        logger.debug("No poster in context %s, using default", context_id)
        return self.urls.asset_url(self.player.default_poster)
