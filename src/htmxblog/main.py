"""HTMX Blog FastAPI application."""

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from htmxblog.config import settings
from htmxblog.core.exceptions import BlogError, InvalidMetadata, PostListingError
from htmxblog.core.models import PageView
from htmxblog.core.renderer import PageRenderer
from htmxblog.core.storage import FileStorage
from htmxblog.core.views import build_home_view, build_list_view, build_single_view

logger = logging.getLogger(__name__)


def _configure_logging(debug: bool) -> None:
    """Configure application logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("markdown").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging."""
    _configure_logging(settings.debug)
    logger.info("Serving posts from %s", settings.posts_dir)
    yield


# Initialize app
app = FastAPI(
    title=settings.app_title,
    debug=settings.debug,
    lifespan=lifespan,
)

app.mount("/static", StaticFiles(directory=str(settings.static_dir)), name="static")

# Initialize storage and renderer
storage = FileStorage(settings.posts_dir, settings.post_extension)
renderer = PageRenderer(
    settings.templates_dir,
    app_title=settings.app_title,
    auto_reload=settings.debug,
)


def is_fragment_request(request: Request) -> bool:
    """True when the client asked for the content region only.

    Header names are case-insensitive; the value must be exactly "true".
    """
    return request.headers.get(settings.fragment_header) == "true"


def render_page(view: PageView) -> HTMLResponse:
    """Render a view to an HTML response."""
    return HTMLResponse(renderer.render(view))


@app.exception_handler(BlogError)
async def blog_error_handler(request: Request, exc: BlogError) -> PlainTextResponse:
    """Log the detail server-side and send the fixed message to the client."""
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "%s in %s %s: %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc,
        exc_info=exc.__cause__,
    )
    return PlainTextResponse(exc.message, status_code=exc.status_code)


@app.get("/", response_class=HTMLResponse)
def homepage(request: Request):
    """Home page."""
    view = build_home_view(settings.home_title, is_fragment_request(request))
    return render_page(view)


@app.get("/blog", response_class=HTMLResponse)
def blog_list(request: Request):
    """All posts, most recent first."""
    try:
        posts = storage.load_all()
    except (InvalidMetadata, OSError) as e:
        raise PostListingError(f"loading posts from {storage.base_path}: {e}") from e
    view = build_list_view(posts, settings.list_title, is_fragment_request(request))
    return render_page(view)


@app.get("/content/{slug:path}", response_class=HTMLResponse)
def blog_content(request: Request, slug: str):
    """A single post rendered from its Markdown file.

    An empty slug matches here too and is reported as not found.
    """
    post = storage.get_post(slug)
    view = build_single_view(post, is_fragment_request(request))
    return render_page(view)


def run() -> None:
    """Run the development server."""
    _configure_logging(settings.debug)
    logger.info("Listening on http://localhost:%d/", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
