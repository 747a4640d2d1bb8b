"""Command-line interface for videofile."""

import logging
from pathlib import Path

import click
import yaml

from . import __version__
from .catalog import YamlCatalog
from .config import (
    CONFIG_FILENAME,
    VideofileConfig,
    config_to_dict,
    create_default_config,
    find_config_file,
    load_config,
)
from .models import VideofileError
from .renderer import VideoPageRenderer, caption_label
from .shell import HtmlPageShell
from .store import DirectoryFileStore, YamlContentStore
from .urls import MediaUrlBuilder

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


@click.group()
@click.version_option(version=__version__, prog_name="videofile")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose):
    """Render HTML5 video playback pages.

    videofile builds the page for a video item from an items manifest and a
    media directory holding posters, video sources and caption tracks.

    \b
    Quick start:
      videofile config init               # Create .videofile.yaml
      videofile render 1 -o page.html     # Render the page of item 1
      videofile player 1                  # Print only the player markup
      videofile label eng.vtt swe.vtt     # Show derived caption labels
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


_config_option = click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True),
    help="Config file path",
)


@main.command()
@click.argument("item_id", type=int)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False),
    help="Write HTML to a file instead of stdout",
)
@_config_option
def render(item_id, output_path, config_path):
    """Render the complete page of a video item.

    \b
    Examples:
      videofile render 7
      videofile render 7 -o lecture.html
      videofile render 7 -c site/.videofile.yaml
    """
    cfg = _load(config_path)
    renderer = _build_renderer(cfg)

    try:
        html = renderer.render_item(item_id)
    except VideofileError as e:
        raise click.ClickException(str(e))

    _write_output(html, output_path)


@main.command()
@click.argument("item_id", type=int)
@click.option(
    "--context",
    "context_id",
    type=int,
    help="Context holding the media files (default: the item's own)",
)
@_config_option
def player(item_id, context_id, config_path):
    """Print the player markup of a video item (no page chrome)."""
    cfg = _load(config_path)
    renderer = _build_renderer(cfg)

    try:
        item = renderer.content.get_item(item_id)
    except VideofileError as e:
        raise click.ClickException(str(e))

    if context_id is None:
        context_id = item.context_id
    click.echo(renderer.render_player(item, context_id))


@main.command()
@click.argument("filenames", nargs=-1, required=True)
@click.option("--lang", "language", help="Language for label lookup")
@click.option(
    "--lang-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Extra language strings directory",
)
def label(filenames, language, lang_dir):
    """Show the caption track label derived from each filename.

    \b
    Examples:
      videofile label eng.vtt transcript.vtt
      videofile label --lang sv eng.vtt
    """
    try:
        catalog = YamlCatalog(
            language=language or "en",
            lang_dirs=[lang_dir] if lang_dir else [],
        )
    except VideofileError as e:
        raise click.ClickException(str(e))

    for filename in filenames:
        click.echo(f"{filename}: {caption_label(filename, catalog)}")


@main.group()
def config():
    """Manage videofile configuration."""
    pass


@config.command("init")
@click.option(
    "-d",
    "--directory",
    type=click.Path(),
    default=".",
    help="Directory to create config in",
)
def config_init(directory):
    """Create a new .videofile.yaml configuration file."""
    try:
        config_path = create_default_config(Path(directory))
        click.echo(f"Created: {config_path}")
        click.echo("\nNext steps:")
        click.echo("  1. Set site_root and the course names in .videofile.yaml")
        click.echo("  2. Describe your videos in items.yaml")
        click.echo("  3. Run: videofile render <item-id>")
    except VideofileError as e:
        raise click.ClickException(str(e))


@config.command("show")
@_config_option
def config_show(config_path):
    """Display current configuration.

    Shows merged configuration from file, environment, and defaults.
    """
    cfg = _load(config_path)
    data = config_to_dict(cfg)
    click.echo(yaml.dump(data, default_flow_style=False, sort_keys=False))


@config.command("where")
@click.option(
    "-d",
    "--directory",
    type=click.Path(exists=True),
    help="Directory to search from",
)
def config_where(directory):
    """Show which config file would be used.

    Searches up the directory tree for .videofile.yaml.
    """
    start = Path(directory) if directory else Path.cwd()
    config_path = find_config_file(start)

    if config_path:
        click.echo(f"Config file: {config_path}")
    else:
        click.echo(f"No {CONFIG_FILENAME} found (searched from {start})")


def _load(config_path: str | None) -> VideofileConfig:
    try:
        return load_config(config_path=Path(config_path) if config_path else None)
    except VideofileError as e:
        raise click.ClickException(str(e))


def _build_renderer(cfg: VideofileConfig) -> VideoPageRenderer:
    """Wire stores, shell and catalog from configuration.

    Raises:
        click.ClickException: If the items manifest or media root is not
            configured, or the manifest cannot be loaded.
    """
    if cfg.items is None:
        raise click.ClickException(f"'items' is not set in {CONFIG_FILENAME}")
    if cfg.media_root is None:
        raise click.ClickException(f"'media_root' is not set in {CONFIG_FILENAME}")

    try:
        content = YamlContentStore(cfg.items)
        catalog = YamlCatalog(
            language=cfg.language,
            lang_dirs=[cfg.lang_dir] if cfg.lang_dir else [],
        )
    except VideofileError as e:
        raise click.ClickException(str(e))

    return VideoPageRenderer(
        files=DirectoryFileStore(cfg.media_root),
        urls=MediaUrlBuilder(cfg.site_root, cfg.namespace),
        shell=HtmlPageShell(cfg.course.to_course()),
        catalog=catalog,
        content=content,
        player=cfg.player,
    )


def _write_output(html: str, output_path: str | None) -> None:
    if output_path is None:
        click.echo(html, nl=False)
        return

    path = Path(output_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
    except OSError as e:
        raise click.ClickException(f"Cannot write output {path}: {e}")
    click.echo(f"Rendered: {path}")


if __name__ == "__main__":
    main()
