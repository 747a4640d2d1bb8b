"""URL construction for attached media files and static assets."""

from urllib.parse import quote

from .host import UrlBuilder
from .models import AttachedFile

DEFAULT_NAMESPACE = "mod_videofile"


class MediaUrlBuilder(UrlBuilder):
    """Builds file URLs under ``<site_root>/media/``.

    Layout:
        <site_root>/media/<context_id>/<namespace>/<category><filepath><item_id>/<filename>

    ``filepath`` carries its own leading and trailing slash, so a file at
    the root of the "videos" category of context 12 becomes
    ``<site_root>/media/12/mod_videofile/videos/0/clip.mp4``.
    """

    def __init__(self, site_root: str, namespace: str = DEFAULT_NAMESPACE):
        self.site_root = site_root.rstrip("/")
        self.namespace = namespace

    def file_url(self, file: AttachedFile, category: str) -> str:
        filepath = _normalize_filepath(file.filepath)
        return (
            f"{self.site_root}/media/{file.context_id}/{quote(self.namespace)}/"
            f"{quote(category)}{quote(filepath)}{file.item_id}/{quote(file.filename)}"
        )

    def asset_url(self, path: str) -> str:
        """Resolve a static asset path.

        Absolute URLs (``scheme://`` or protocol-relative ``//``) are
        returned unchanged; anything else is treated as site-relative. An
        empty path yields an empty string.
        """
        if not path:
            return ""
        if "://" in path or path.startswith("//"):
            return path
        return f"{self.site_root}/{path.lstrip('/')}"


def _normalize_filepath(filepath: str) -> str:
    """Ensure a filepath begins and ends with a single slash."""
    stripped = filepath.strip("/")
    if not stripped:
        return "/"
    return f"/{stripped}/"
