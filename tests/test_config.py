"""Tests for videofile.config module."""

import pytest

from videofile.config import (
    CONFIG_FILENAME,
    CourseConfig,
    PlayerConfig,
    VideofileConfig,
    config_to_dict,
    create_default_config,
    find_config_file,
    load_config,
)
from videofile.models import Course, VideofileError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("VIDEOFILE_SITE_ROOT", raising=False)
    monkeypatch.delenv("VIDEOFILE_LANG", raising=False)


class TestFindConfigFile:
    """Tests for find_config_file function."""

    def test_finds_config_in_current_dir(self, tmp_path):
        config_path = tmp_path / CONFIG_FILENAME
        config_path.write_text("site_root: https://example.org")

        assert find_config_file(tmp_path) == config_path

    def test_finds_config_in_parent_dir(self, tmp_path):
        config_path = tmp_path / CONFIG_FILENAME
        config_path.write_text("site_root: https://example.org")

        subdir = tmp_path / "sub" / "deep"
        subdir.mkdir(parents=True)

        assert find_config_file(subdir) == config_path

    def test_returns_none_when_not_found(self, tmp_path):
        assert find_config_file(tmp_path) is None

    def test_starts_from_file_path(self, tmp_path):
        config_path = tmp_path / CONFIG_FILENAME
        config_path.write_text("site_root: https://example.org")

        file_path = tmp_path / "items.yaml"
        file_path.write_text("items: []")

        assert find_config_file(file_path) == config_path


class TestLoadConfig:
    """Tests for load_config function."""

    def test_loads_from_file(self, tmp_path):
        config_path = tmp_path / CONFIG_FILENAME
        config_path.write_text("""
site_root: "https://example.org/moodle"
namespace: "mod_lecture"
media_root: "media"
items: "items.yaml"
language: "sv"
lang_dir: "/srv/lang"
course:
  short_name: "CS101"
  full_name: "Computer Science"
player:
  preload: "metadata"
  default_poster: "https://cdn.example.net/poster.png"
""")

        config = load_config(config_path=config_path)

        assert config.site_root == "https://example.org/moodle"
        assert config.namespace == "mod_lecture"
        assert config.media_root == tmp_path / "media"
        assert config.items == tmp_path / "items.yaml"
        assert str(config.lang_dir) == "/srv/lang"
        assert config.language == "sv"
        assert config.course.to_course() == Course("CS101", "Computer Science")
        assert config.player.preload == "metadata"
        assert config.player.default_poster == "https://cdn.example.net/poster.png"
        # Unspecified player settings keep their defaults
        assert config.player.css_class == PlayerConfig().css_class
        assert config.config_path == config_path

    def test_defaults_without_file(self, tmp_path):
        config = load_config(start_path=tmp_path)
        assert config.site_root == "http://localhost"
        assert config.namespace == "mod_videofile"
        assert config.media_root is None
        assert config.config_path is None

    def test_env_overrides(self, tmp_path, monkeypatch):
        config_path = tmp_path / CONFIG_FILENAME
        config_path.write_text('site_root: "https://file.example.org"\nlanguage: en\n')
        monkeypatch.setenv("VIDEOFILE_SITE_ROOT", "https://env.example.org")
        monkeypatch.setenv("VIDEOFILE_LANG", "sv")

        config = load_config(config_path=config_path)
        assert config.site_root == "https://env.example.org"
        assert config.language == "sv"

    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(VideofileError, match="Config file not found"):
            load_config(config_path=tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        config_path = tmp_path / CONFIG_FILENAME
        config_path.write_text("site_root: [unclosed")
        with pytest.raises(VideofileError, match="Invalid YAML"):
            load_config(config_path=config_path)

    def test_non_mapping(self, tmp_path):
        config_path = tmp_path / CONFIG_FILENAME
        config_path.write_text("- a\n- b\n")
        with pytest.raises(VideofileError, match="must contain a mapping"):
            load_config(config_path=config_path)

    def test_invalid_preload(self, tmp_path):
        config_path = tmp_path / CONFIG_FILENAME
        config_path.write_text("player:\n  preload: always\n")
        with pytest.raises(VideofileError, match="Invalid preload"):
            load_config(config_path=config_path)

    def test_unquoted_boolean_language_rejected(self, tmp_path):
        """YAML reads `language: no` as False, which must not become "False"."""
        config_path = tmp_path / CONFIG_FILENAME
        config_path.write_text("language: no\n")
        with pytest.raises(VideofileError, match="'language' must be a string"):
            load_config(config_path=config_path)

    def test_numeric_namespace_rejected(self, tmp_path):
        config_path = tmp_path / CONFIG_FILENAME
        config_path.write_text("namespace: 42\n")
        with pytest.raises(VideofileError, match="'namespace' must be a string"):
            load_config(config_path=config_path)


class TestValidate:
    """Tests for VideofileConfig.validate()."""

    def test_defaults_valid(self):
        VideofileConfig().validate()

    def test_empty_site_root(self):
        with pytest.raises(VideofileError, match="site_root"):
            VideofileConfig(site_root="").validate()

    def test_invalid_language(self):
        with pytest.raises(VideofileError, match="Invalid language"):
            VideofileConfig(language="EN-us").validate()


class TestCreateDefaultConfig:
    """Tests for create_default_config function."""

    def test_creates_loadable_config(self, tmp_path):
        config_path = create_default_config(tmp_path)
        assert config_path == tmp_path / CONFIG_FILENAME

        config = load_config(config_path=config_path)
        assert config.media_root == tmp_path / "media"
        assert config.items == tmp_path / "items.yaml"
        assert config.player.preload == "auto"

    def test_refuses_to_overwrite(self, tmp_path):
        create_default_config(tmp_path)
        with pytest.raises(VideofileError, match="already exists"):
            create_default_config(tmp_path)


class TestConfigToDict:
    """Tests for config_to_dict function."""

    def test_round_trips_fields(self, tmp_path):
        config = VideofileConfig(
            media_root=tmp_path,
            course=CourseConfig(short_name="CS101", full_name="Computer Science"),
        )
        data = config_to_dict(config)
        assert data["media_root"] == str(tmp_path)
        assert data["items"] is None
        assert data["course"] == {"short_name": "CS101", "full_name": "Computer Science"}
        assert data["player"]["preload"] == "auto"
