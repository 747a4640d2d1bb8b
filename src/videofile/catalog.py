"""YAML-backed localization catalog.

Strings live in ``<dir>/<language>/<namespace>.yaml`` as a flat mapping of
key to translated string. Built-in strings ship in ``lang/`` next to this
module; extra directories (``lang_dir`` in config) override them key by
key. Lookups in a language other than English fall back to English before
giving up with the ``[[key]]`` placeholder.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

import yaml

from .host import LocalizationCatalog, placeholder
from .models import VideofileError

logger = logging.getLogger(__name__)

# Path to the built-in language directory (ships with videofile)
_BUILTIN_LANG_DIR = Path(__file__).parent / "lang"

FALLBACK_LANGUAGE = "en"

# Language and namespace names become path components.
_SAFE_NAME_RE = re.compile(r"^[a-z][a-z0-9_]*$")


class YamlCatalog(LocalizationCatalog):
    """Localization catalog reading YAML string files.

    Args:
        language: Language code to look strings up in (e.g. "en", "sv").
        lang_dirs: Extra language directories. Later entries override
            earlier ones, and all override the built-in strings.
    """

    def __init__(self, language: str = FALLBACK_LANGUAGE, lang_dirs=()):
        if not _SAFE_NAME_RE.match(language):
            raise VideofileError(f"Invalid language code: {language!r}")
        self.language = language
        self.lang_dirs = [_BUILTIN_LANG_DIR] + [Path(d) for d in lang_dirs]
        self._cache: dict[tuple[str, str], dict[str, str]] = {}

        for directory in self.lang_dirs[1:]:
            if not directory.is_dir():
                logger.warning("lang_dir does not exist: %s", directory)

    def lookup(self, key: str, namespace: str) -> str:
        for language in self._languages():
            strings = self._strings(language, namespace)
            if key in strings:
                return strings[key]
        return placeholder(key)

    def has(self, key: str, namespace: str) -> bool:
        return any(
            key in self._strings(language, namespace)
            for language in self._languages()
        )

    def _languages(self) -> list[str]:
        if self.language == FALLBACK_LANGUAGE:
            return [self.language]
        return [self.language, FALLBACK_LANGUAGE]

    def _strings(self, language: str, namespace: str) -> dict[str, str]:
        """Load and merge the strings of one namespace in one language."""
        cache_key = (language, namespace)
        if cache_key in self._cache:
            return self._cache[cache_key]

        strings: dict[str, str] = {}
        if _SAFE_NAME_RE.match(namespace):
            for directory in self.lang_dirs:
                strings.update(_load_strings(directory / language / f"{namespace}.yaml"))
        else:
            logger.debug("Ignoring lookup in invalid namespace %r", namespace)

        self._cache[cache_key] = strings
        return strings


def _load_strings(path: Path) -> dict[str, str]:
    """Read one string file.

    Missing files are normal (not every language defines every namespace).
    Unreadable or malformed files are logged and skipped so a broken
    translation never breaks page rendering.
    """
    if not path.is_file():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Cannot load language file %s: %s", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Language file %s is not a mapping", path)
        return {}

    return {str(k): str(v) for k, v in data.items() if v is not None}
