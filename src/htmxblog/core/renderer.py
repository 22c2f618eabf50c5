"""Page renderer: binds view data into the shared Jinja2 template set.

The template set is compiled once, on first use, and then shared
read-only by every request.
"""

import logging
import threading
from datetime import datetime
from pathlib import Path

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateError,
    select_autoescape,
)

from htmxblog.core.exceptions import RenderExecutionError, TemplateCompositionError
from htmxblog.core.models import PageKind, PageView

logger = logging.getLogger(__name__)

# Layout entry point and the shell regions it wraps around the content
BASE_TEMPLATE = "base.html"
SHELL_REGIONS = ("header.html", "hero.html", "footer.html")

# Content region spliced into the layout for each page kind
CONTENT_REGIONS: dict[PageKind, str] = {
    PageKind.HOME: "homepage.html",
    PageKind.LIST: "bloglist.html",
    PageKind.SINGLE: "blogpost.html",
}

REQUIRED_TEMPLATES = (BASE_TEMPLATE, *SHELL_REGIONS, *CONTENT_REGIONS.values())


def datefmt_filter(dt: datetime | None, fmt: str = "%B %d, %Y") -> str:
    """Format a post date for display; undated posts show nothing."""
    if dt is None:
        return ""
    return dt.strftime(fmt)


class PageRenderer:
    """Renders page views through the shared layout."""

    def __init__(
        self, templates_dir: Path, app_title: str = "", auto_reload: bool = False
    ):
        self.templates_dir = templates_dir
        self.app_title = app_title
        self.auto_reload = auto_reload
        self._base: Template | None = None
        self._lock = threading.Lock()

    def _compose(self) -> Template:
        """Build the environment and compile every required template."""
        env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
            auto_reload=self.auto_reload,
        )
        env.filters["datefmt"] = datefmt_filter
        env.globals["app_title"] = self.app_title
        try:
            compiled = {name: env.get_template(name) for name in REQUIRED_TEMPLATES}
        except TemplateError as e:
            raise TemplateCompositionError(
                f"failed to compose templates from {self.templates_dir}: {e}"
            ) from e
        logger.info(
            "Compiled %d templates from %s", len(compiled), self.templates_dir
        )
        return compiled[BASE_TEMPLATE]

    def _get_base(self) -> Template:
        """Return the compiled layout, composing the template set on first use.

        A failed composition is not remembered, so the next call retries.
        """
        if self._base is None:
            with self._lock:
                if self._base is None:
                    self._base = self._compose()
        return self._base

    def render(self, view: PageView) -> str:
        """Render a view to a complete HTML document or a fragment.

        Raises:
            TemplateCompositionError: If the template set cannot be built.
            RenderExecutionError: If the layout fails while executing.
        """
        base = self._get_base()
        context = {
            "view": view,
            "title": view.title,
            "page_kind": view.page_kind.value,
            "is_fragment": view.is_fragment,
            "content_region": CONTENT_REGIONS[view.page_kind],
        }
        try:
            return base.render(context)
        except TemplateError as e:
            raise RenderExecutionError(
                f"failed to render {view.page_kind.value} page: {e}"
            ) from e

