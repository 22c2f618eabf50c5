"""Unit tests for the page renderer and template set."""

import shutil
import threading
from datetime import datetime, timezone

import pytest

from htmxblog.config import PACKAGE_DIR
from htmxblog.core.exceptions import RenderExecutionError, TemplateCompositionError
from htmxblog.core.models import HomeView, ListView, PageKind, Post, SingleView
from htmxblog.core.renderer import (
    CONTENT_REGIONS,
    REQUIRED_TEMPLATES,
    PageRenderer,
    datefmt_filter,
)

TEMPLATES = PACKAGE_DIR / "templates"


@pytest.fixture
def renderer():
    return PageRenderer(TEMPLATES, app_title="Test Blog")


@pytest.fixture
def templates_copy(tmp_path):
    target = tmp_path / "templates"
    shutil.copytree(TEMPLATES, target)
    return target


# ============================================================
# Template table
# ============================================================


class TestTemplateTable:
    def test_every_page_kind_has_a_region(self):
        assert set(CONTENT_REGIONS) == set(PageKind)

    def test_seven_templates(self):
        assert len(REQUIRED_TEMPLATES) == 7
        for name in REQUIRED_TEMPLATES:
            assert (TEMPLATES / name).is_file()


# ============================================================
# Full page vs fragment
# ============================================================


class TestRender:
    def test_full_home_page(self, renderer):
        html = renderer.render(HomeView(title="Home Page"))
        assert "<!DOCTYPE html>" in html
        assert 'class="site-header"' in html
        assert 'class="hero"' in html
        assert 'class="site-footer"' in html
        assert 'class="homepage"' in html
        assert "<title>Home Page | Test Blog</title>" in html

    def test_fragment_home_page(self, renderer):
        html = renderer.render(HomeView(title="Home Page", is_fragment=True))
        assert "<!DOCTYPE html>" not in html
        assert 'class="site-header"' not in html
        assert 'class="hero"' not in html
        assert 'class="site-footer"' not in html
        assert 'class="homepage"' in html
        assert "<title>Home Page | Test Blog</title>" in html

    def test_list_page(self, renderer):
        posts = [
            Post(
                title="Hello",
                slug="hello",
                description="First <post>",
                date=datetime(2024, 6, 1, tzinfo=timezone.utc),
            )
        ]
        html = renderer.render(ListView(title="Blog Posts", posts=posts))
        assert 'href="/content/hello"' in html
        assert "June 01, 2024" in html
        assert "First &lt;post&gt;" in html
        assert 'class="homepage"' not in html

    def test_empty_list_page(self, renderer):
        html = renderer.render(ListView(title="Blog Posts", is_fragment=True))
        assert "No posts yet." in html

    def test_single_page_content_is_not_escaped(self, renderer):
        view = SingleView(title="A <b> title", content="<h1>Body</h1>")
        html = renderer.render(view)
        assert "<h1>Body</h1>" in html
        assert "A &lt;b&gt; title" in html

    def test_single_page_hero_image(self, renderer):
        view = SingleView(title="A", content="", hero_image="/img/a.png")
        assert 'src="/img/a.png"' in renderer.render(view)

    def test_templates_compiled_once(self, renderer):
        renderer.render(HomeView(title="Home"))
        base = renderer._base
        renderer.render(HomeView(title="Home"))
        assert renderer._base is base

    def test_concurrent_renders(self, renderer):
        results: list[str] = []

        def work():
            results.append(renderer.render(HomeView(title="Home", is_fragment=True)))

        threads = [threading.Thread(target=work) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(results) == 8
        assert len(set(results)) == 1


# ============================================================
# Failures
# ============================================================


class TestRenderFailures:
    def test_missing_template(self, templates_copy):
        (templates_copy / "footer.html").unlink()
        renderer = PageRenderer(templates_copy)
        with pytest.raises(TemplateCompositionError):
            renderer.render(HomeView(title="Home"))

    def test_syntax_error(self, templates_copy):
        (templates_copy / "hero.html").write_text("{% if %}")
        renderer = PageRenderer(templates_copy)
        with pytest.raises(TemplateCompositionError):
            renderer.render(HomeView(title="Home"))

    def test_composition_retried_after_fix(self, templates_copy):
        hero = (templates_copy / "hero.html").read_text()
        (templates_copy / "hero.html").write_text("{% if %}")
        renderer = PageRenderer(templates_copy)
        with pytest.raises(TemplateCompositionError):
            renderer.render(HomeView(title="Home"))
        (templates_copy / "hero.html").write_text(hero)
        assert 'class="hero"' in renderer.render(HomeView(title="Home"))

    def test_undefined_field(self, templates_copy):
        (templates_copy / "homepage.html").write_text("{{ view.missing_field }}")
        renderer = PageRenderer(templates_copy)
        with pytest.raises(RenderExecutionError):
            renderer.render(HomeView(title="Home"))


class TestDatefmt:
    def test_none(self):
        assert datefmt_filter(None) == ""

    def test_default_format(self):
        assert datefmt_filter(datetime(2024, 1, 5)) == "January 05, 2024"

    def test_custom_format(self):
        assert datefmt_filter(datetime(2024, 1, 5), "%Y-%m-%d") == "2024-01-05"
