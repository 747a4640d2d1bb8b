"""Content and file stores.

In-memory stores are for embedding the renderer in another application;
``YamlContentStore`` and ``DirectoryFileStore`` back the command-line tool
with an items manifest and a media directory tree.
"""

import logging
import mimetypes
from pathlib import Path

import yaml

from .host import ContentStore, FileStore
from .models import CATEGORIES, AttachedFile, ContentItem, VideofileError

logger = logging.getLogger(__name__)

# MIME types the platform table may not know (caption formats in particular)
MIME_OVERRIDES = {
    ".vtt": "text/vtt",
    ".srt": "application/x-subrip",
    ".webm": "video/webm",
    ".ogv": "video/ogg",
    ".m4v": "video/mp4",
    ".webp": "image/webp",
}


def detect_mime(path: Path) -> str:
    """Detect the MIME type of a file from its extension.

    Args:
        path: Path to the file.

    Returns:
        MIME type string, or an empty string when the type is unknown.
    """
    suffix = path.suffix.lower()
    if suffix in MIME_OVERRIDES:
        return MIME_OVERRIDES[suffix]

    mime, _ = mimetypes.guess_type(str(path))
    return mime or ""


class MemoryContentStore(ContentStore):
    """Content store holding items in a dict."""

    def __init__(self, items=()):
        self.items: dict[int, ContentItem] = {}
        for item in items:
            self.add(item)

    def add(self, item: ContentItem) -> None:
        self.items[item.id] = item

    def get_item(self, item_id: int) -> ContentItem:
        try:
            return self.items[item_id]
        except KeyError:
            raise VideofileError(f"Content item not found: {item_id}") from None


class MemoryFileStore(FileStore):
    """File store holding attached files in memory."""

    def __init__(self, files=()):
        self.files: list[AttachedFile] = []
        for file in files:
            self.add(file)

    def add(self, file: AttachedFile) -> None:
        self.files.append(file)

    def list_files(self, context_id: int, category: str) -> list[AttachedFile]:
        matching = [
            f
            for f in self.files
            if f.context_id == context_id and f.category == category
        ]
        return sorted(matching, key=lambda f: f.sort_key)


class YamlContentStore(MemoryContentStore):
    """Content store loaded from a YAML items manifest.

    Manifest format::

        items:
          - id: 1
            name: "Lecture 1"
            description: "<p>Introduction</p>"
            width: 800
            height: 500
            context_id: 42

    Raises:
        VideofileError: If the manifest cannot be read or an entry is invalid.
    """

    def __init__(self, path: Path):
        super().__init__()
        self.path = Path(path)

        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise VideofileError(f"Invalid YAML in {self.path}: {e}") from e
        except OSError as e:
            raise VideofileError(f"Cannot read items manifest {self.path}: {e}") from e

        entries = data.get("items", []) if isinstance(data, dict) else None
        if not isinstance(entries, list):
            raise VideofileError(f"'items' must be a list in {self.path}")

        for entry in entries:
            self.add(_item_from_dict(entry, self.path))


def _item_from_dict(entry, source: Path) -> ContentItem:
    if not isinstance(entry, dict):
        raise VideofileError(f"Invalid item entry in {source}: {entry!r}")

    missing = [k for k in ("id", "name", "context_id") if k not in entry]
    if missing:
        raise VideofileError(
            f"Item entry in {source} is missing: {', '.join(missing)}"
        )

    try:
        return ContentItem(
            id=int(entry["id"]),
            name=str(entry["name"]),
            description=(
                str(entry["description"]) if entry.get("description") else None
            ),
            width=int(entry.get("width", 800)),
            height=int(entry.get("height", 500)),
            context_id=int(entry["context_id"]),
        )
    except (TypeError, ValueError) as e:
        raise VideofileError(f"Invalid item entry in {source}: {e}") from e


class DirectoryFileStore(FileStore):
    """File store reading a media directory tree.

    Layout::

        <media_root>/<context_id>/<category>/[<subdir>/...]<filename>

    Files directly inside the category directory get filepath ``/``; files
    in subdirectories get ``/<subdir>/``. Hidden files are ignored. Item id
    is always 0.
    """

    def __init__(self, media_root: Path):
        self.media_root = Path(media_root)
        if not self.media_root.is_dir():
            logger.warning("media_root does not exist: %s", self.media_root)

    def list_files(self, context_id: int, category: str) -> list[AttachedFile]:
        if category not in CATEGORIES:
            return []

        category_dir = self.media_root / str(context_id) / category
        if not category_dir.is_dir():
            return []

        files = []
        for path in category_dir.rglob("*"):
            rel = path.relative_to(category_dir)
            if not path.is_file() or any(p.startswith(".") for p in rel.parts):
                continue

            parent = rel.parent.as_posix()
            filepath = "/" if parent == "." else f"/{parent}/"
            files.append(
                AttachedFile(
                    context_id=context_id,
                    category=category,
                    filename=path.name,
                    mimetype=detect_mime(path),
                    filepath=filepath,
                )
            )

        return sorted(files, key=lambda f: f.sort_key)
