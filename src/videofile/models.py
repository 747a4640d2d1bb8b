"""Data types shared by the videofile renderer and its collaborators."""

from dataclasses import dataclass

POSTERS = "posters"
VIDEOS = "videos"
CAPTIONS = "captions"

CATEGORIES = (POSTERS, VIDEOS, CAPTIONS)


class VideofileError(Exception):
    """Base exception for videofile errors."""

    pass


@dataclass(frozen=True)
class Course:
    """Course that owns the page being rendered."""

    short_name: str
    full_name: str


@dataclass(frozen=True)
class ContentItem:
    """A video content item.

    Attributes:
        id: Item identifier, used for the player element id.
        name: Display name (plain text).
        description: Optional rich-text HTML shown above the player.
        width: Player width in pixels.
        height: Player height in pixels.
        context_id: Context grouping the item's attached files.
    """

    id: int
    name: str
    width: int
    height: int
    context_id: int
    description: str | None = None


@dataclass(frozen=True)
class AttachedFile:
    """A file attached to a (context, category) pair.

    ``filepath`` always begins and ends with ``/``; a file at the root of
    its category has filepath ``/``.
    """

    context_id: int
    category: str
    filename: str
    mimetype: str = ""
    item_id: int = 0
    filepath: str = "/"

    @property
    def sort_key(self) -> tuple[int, str, str]:
        return (self.item_id, self.filepath, self.filename)
