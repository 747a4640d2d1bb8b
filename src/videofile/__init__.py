"""videofile - Render HTML5 video playback pages with posters and captions."""

__version__ = "1.0.0"

from .catalog import YamlCatalog
from .models import (
    CAPTIONS,
    POSTERS,
    VIDEOS,
    AttachedFile,
    ContentItem,
    Course,
    VideofileError,
)
from .renderer import VideoPageRenderer, caption_label
from .shell import HtmlPageShell
from .store import DirectoryFileStore, MemoryContentStore, MemoryFileStore
from .urls import MediaUrlBuilder

__all__ = [
    "VideoPageRenderer",
    "caption_label",
    "ContentItem",
    "AttachedFile",
    "Course",
    "VideofileError",
    "POSTERS",
    "VIDEOS",
    "CAPTIONS",
    "HtmlPageShell",
    "MediaUrlBuilder",
    "YamlCatalog",
    "MemoryContentStore",
    "MemoryFileStore",
    "DirectoryFileStore",
    "__version__",
]
