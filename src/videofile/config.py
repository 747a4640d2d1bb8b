"""Configuration management for videofile.

Handles loading .videofile.yaml files with directory traversal,
environment variable overrides, and default values.
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .models import Course, VideofileError
from .urls import DEFAULT_NAMESPACE

CONFIG_FILENAME = ".videofile.yaml"
ENV_SITE_ROOT = "VIDEOFILE_SITE_ROOT"
ENV_LANG = "VIDEOFILE_LANG"

_LANGUAGE_RE = re.compile(r"^[a-z][a-z0-9_]*$")


@dataclass
class PlayerConfig:
    """Video player settings."""

    css_url: str = "/mod/videofile/video-js/video-js.min.css"
    js_url: str = "/mod/videofile/video-js/video.min.js"
    default_poster: str = "/mod/videofile/pix/moodle-logo.png"
    css_class: str = "video-js vjs-default-skin"
    preload: str = "auto"  # "auto", "metadata", "none"


@dataclass
class CourseConfig:
    """Course the rendered pages belong to."""

    short_name: str = "COURSE"
    full_name: str = "Course"

    def to_course(self) -> Course:
        return Course(short_name=self.short_name, full_name=self.full_name)


@dataclass
class VideofileConfig:
    """Complete videofile configuration."""

    site_root: str = "http://localhost"
    namespace: str = DEFAULT_NAMESPACE
    media_root: Path | None = None  # Media directory tree for DirectoryFileStore
    items: Path | None = None  # Items manifest for YamlContentStore
    language: str = "en"
    lang_dir: Path | None = None  # Extra language strings
    course: CourseConfig = field(default_factory=CourseConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    config_path: Path | None = None  # Path where config was loaded from

    def validate(self) -> None:
        """Validate configuration.

        Raises:
            VideofileError: If configuration is invalid.
        """
        if not self.site_root:
            raise VideofileError("site_root cannot be empty")

        valid_preload = {"auto", "metadata", "none"}
        if self.player.preload not in valid_preload:
            raise VideofileError(
                f"Invalid preload value: {self.player.preload}. "
                f"Must be one of: {', '.join(sorted(valid_preload))}"
            )

        if not _LANGUAGE_RE.match(self.language):
            raise VideofileError(f"Invalid language code: {self.language!r}")


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find .videofile.yaml by traversing up from start_path.

    Args:
        start_path: Directory to start searching from. Defaults to cwd.

    Returns:
        Path to config file if found, None otherwise.
    """
    if start_path is None:
        start_path = Path.cwd()
    else:
        start_path = Path(start_path).resolve()

    # If start_path is a file, use its parent directory
    if start_path.is_file():
        start_path = start_path.parent

    current = start_path
    while True:
        config_path = current / CONFIG_FILENAME
        if config_path.is_file():
            return config_path

        parent = current.parent
        if parent == current:
            return None
        current = parent


def load_config(
    config_path: Path | None = None,
    start_path: Path | None = None,
) -> VideofileConfig:
    """Load configuration from file, environment, and defaults.

    Priority (highest to lowest):
    1. Environment variables (VIDEOFILE_SITE_ROOT, VIDEOFILE_LANG)
    2. Config file (.videofile.yaml)
    3. Defaults

    Args:
        config_path: Explicit path to config file. If None, searches.
        start_path: Directory to start config file search from.

    Returns:
        Loaded and validated configuration.
    """
    config = VideofileConfig()

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.is_file():
            raise VideofileError(f"Config file not found: {config_path}")
    else:
        config_path = find_config_file(start_path)

    if config_path is not None:
        config = _load_config_file(config_path)
        config.config_path = config_path

    env_site_root = os.environ.get(ENV_SITE_ROOT)
    if env_site_root:
        config.site_root = env_site_root

    env_lang = os.environ.get(ENV_LANG)
    if env_lang:
        config.language = env_lang

    config.validate()
    return config


def _load_config_file(config_path: Path) -> VideofileConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to .videofile.yaml file.

    Returns:
        Configuration loaded from file.

    Raises:
        VideofileError: If file cannot be read or parsed.
    """
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise VideofileError(f"Invalid YAML in {config_path}: {e}") from e
    except OSError as e:
        raise VideofileError(f"Cannot read config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise VideofileError(f"Config file {config_path} must contain a mapping")

    config = VideofileConfig(config_path=config_path)

    for key in ("site_root", "namespace", "language"):
        if key in data:
            if not isinstance(data[key], str):
                raise VideofileError(
                    f"'{key}' must be a string in {config_path}, "
                    f"got {data[key]!r} (quote the value)"
                )
            setattr(config, key, data[key])

    # Relative paths resolve against the config file directory
    for key in ("media_root", "items", "lang_dir"):
        if data.get(key):
            path = Path(data[key])
            if not path.is_absolute():
                path = config_path.parent / path
            setattr(config, key, path)

    if "course" in data and isinstance(data["course"], dict):
        course_data = data["course"]
        config.course = CourseConfig(
            short_name=str(course_data.get("short_name", config.course.short_name)),
            full_name=str(course_data.get("full_name", config.course.full_name)),
        )

    if "player" in data and isinstance(data["player"], dict):
        player_data = data["player"]
        config.player = PlayerConfig(
            css_url=player_data.get("css_url", config.player.css_url),
            js_url=player_data.get("js_url", config.player.js_url),
            default_poster=player_data.get(
                "default_poster", config.player.default_poster
            ),
            css_class=player_data.get("css_class", config.player.css_class),
            preload=player_data.get("preload", config.player.preload),
        )

    return config


def create_default_config(path: Path | None = None) -> Path:
    """Create a default .videofile.yaml config file.

    Args:
        path: Directory to create config in. Defaults to cwd.

    Returns:
        Path to created config file.

    Raises:
        VideofileError: If file already exists or cannot be written.
    """
    if path is None:
        path = Path.cwd()
    else:
        path = Path(path)

    config_path = path / CONFIG_FILENAME

    if config_path.exists():
        raise VideofileError(f"Config file already exists: {config_path}")

    config_content = '''# videofile configuration

# Public root URL of the site serving pages and media
# (or use VIDEOFILE_SITE_ROOT env var)
site_root: "http://localhost"

# Namespace segment in media URLs
namespace: "mod_videofile"

# Media directory: <media_root>/<context_id>/<posters|videos|captions>/...
media_root: "media"

# Items manifest
items: "items.yaml"

# Language for caption labels (or use VIDEOFILE_LANG env var)
language: "en"
# lang_dir: "lang"      # Extra strings: <lang_dir>/<language>/<namespace>.yaml

course:
  short_name: "COURSE"
  full_name: "Course"

player:
  css_url: "/mod/videofile/video-js/video-js.min.css"
  js_url: "/mod/videofile/video-js/video.min.js"
  default_poster: "/mod/videofile/pix/moodle-logo.png"
  css_class: "video-js vjs-default-skin"
  preload: "auto"       # "auto", "metadata", "none"
'''

    try:
        config_path.write_text(config_content)
    except OSError as e:
        raise VideofileError(f"Cannot write config file: {e}") from e

    return config_path


def config_to_dict(config: VideofileConfig) -> dict[str, Any]:
    """Convert config to dictionary for display."""
    return {
        "site_root": config.site_root,
        "namespace": config.namespace,
        "media_root": str(config.media_root) if config.media_root else None,
        "items": str(config.items) if config.items else None,
        "language": config.language,
        "lang_dir": str(config.lang_dir) if config.lang_dir else None,
        "course": {
            "short_name": config.course.short_name,
            "full_name": config.course.full_name,
        },
        "player": {
            "css_url": config.player.css_url,
            "js_url": config.player.js_url,
            "default_poster": config.player.default_poster,
            "css_class": config.player.css_class,
            "preload": config.player.preload,
        },
        "config_path": str(config.config_path) if config.config_path else None,
    }
