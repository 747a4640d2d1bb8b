"""Tests for videofile.shell and videofile.urls modules."""

from bs4 import BeautifulSoup

from videofile.models import AttachedFile, Course
from videofile.shell import HtmlPageShell
from videofile.urls import MediaUrlBuilder


def _shell():
    return HtmlPageShell(Course(short_name="CS101", full_name="Computer Science"))


class TestHtmlPageShell:
    """Tests for HtmlPageShell."""

    def test_header_and_footer_form_document(self):
        shell = _shell()
        shell.set_title("CS101: Intro")
        shell.set_heading("Computer Science")
        html = shell.render_header() + "<p>body</p>" + shell.render_footer()

        soup = BeautifulSoup(html, "html.parser")
        assert soup.title.string == "CS101: Intro"
        assert soup.find("h1").string == "Computer Science"
        assert soup.find(id="region-main").find("p").string == "body"
        assert soup.find("footer") is not None

    def test_title_escaped(self):
        shell = _shell()
        shell.set_title('<script>"x"</script>')
        html = shell.render_header()
        assert "<title>&lt;script&gt;&quot;x&quot;&lt;/script&gt;</title>" in html

    def test_required_assets_deduplicated(self):
        shell = _shell()
        shell.require_css("/a.css")
        shell.require_css("/a.css")
        shell.require_js("/a.js")
        shell.require_js("")
        html = shell.render_header()
        assert html.count('href="/a.css"') == 1
        assert html.count('<script src="/a.js"></script>') == 1
        assert html.count("<script") == 1

    def test_render_heading(self):
        shell = _shell()
        assert shell.render_heading("Intro", 3) == "<h3>Intro</h3>"
        assert shell.render_heading("a & b") == "<h2>a &amp; b</h2>"

    def test_render_heading_clamps_level(self):
        shell = _shell()
        assert shell.render_heading("x", 9) == "<h6>x</h6>"
        assert shell.render_heading("x", 0) == "<h1>x</h1>"

    def test_render_box(self):
        shell = _shell()
        html = shell.render_box("<p>hi</p>", "generalbox boxaligncenter", "intro")
        assert html == (
            '<div class="box generalbox boxaligncenter" id="intro"><p>hi</p></div>'
        )

    def test_render_box_without_id(self):
        assert _shell().render_box("x") == '<div class="box generalbox">x</div>'

    def test_format_string_collapses_whitespace(self):
        assert _shell().format_string("  Lecture \n 1 ") == "Lecture 1"

    def test_format_text_keeps_markup(self):
        html = '<p>See <a href="https://example.org">here</a> <em>now</em></p>'
        assert _shell().format_text(html) == html

    def test_format_text_removes_scripts(self):
        html = _shell().format_text("<p>ok</p><script>alert(1)</script>")
        assert html == "<p>ok</p>"

    def test_format_text_removes_handlers(self):
        html = _shell().format_text(
            '<p onclick="evil()">x</p><a href="javascript:evil()">y</a>'
        )
        assert "onclick" not in html
        assert "javascript:" not in html
        assert ">x</p>" in html


class TestMediaUrlBuilder:
    """Tests for MediaUrlBuilder."""

    def _file(self, **kwargs):
        defaults = {
            "context_id": 12,
            "category": "videos",
            "filename": "clip.mp4",
            "mimetype": "video/mp4",
        }
        defaults.update(kwargs)
        return AttachedFile(**defaults)

    def test_root_file(self):
        urls = MediaUrlBuilder("https://example.org")
        assert urls.file_url(self._file(), "videos") == (
            "https://example.org/media/12/mod_videofile/videos/0/clip.mp4"
        )

    def test_nested_path_and_item(self):
        urls = MediaUrlBuilder("https://example.org/")
        url = urls.file_url(self._file(filepath="/hd/", item_id=3), "videos")
        assert url == "https://example.org/media/12/mod_videofile/videos/hd/3/clip.mp4"

    def test_filepath_normalized(self):
        urls = MediaUrlBuilder("https://example.org")
        url = urls.file_url(self._file(filepath="hd"), "videos")
        assert url.endswith("/videos/hd/0/clip.mp4")

    def test_custom_namespace(self):
        urls = MediaUrlBuilder("https://example.org", namespace="mod_lecture")
        assert "/12/mod_lecture/captions/" in urls.file_url(self._file(), "captions")

    def test_filename_encoded(self):
        urls = MediaUrlBuilder("https://example.org")
        url = urls.file_url(self._file(filename="my clip#1.mp4"), "videos")
        assert url.endswith("/0/my%20clip%231.mp4")

    def test_asset_url_relative(self):
        urls = MediaUrlBuilder("https://example.org/moodle")
        assert urls.asset_url("/pix/logo.png") == "https://example.org/moodle/pix/logo.png"
        assert urls.asset_url("pix/logo.png") == "https://example.org/moodle/pix/logo.png"

    def test_asset_url_absolute(self):
        urls = MediaUrlBuilder("https://example.org")
        assert urls.asset_url("https://cdn.net/v.js") == "https://cdn.net/v.js"
        assert urls.asset_url("//cdn.net/v.js") == "//cdn.net/v.js"

    def test_asset_url_empty(self):
        assert MediaUrlBuilder("https://example.org").asset_url("") == ""
