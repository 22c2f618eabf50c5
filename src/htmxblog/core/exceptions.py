"""Error types raised while loading and rendering posts.

Every error carries the HTTP status and the fixed message shown to the
client. The detail passed to the constructor is only ever logged.
"""


class BlogError(Exception):
    """Base class for request-terminating errors."""

    status_code: int = 500
    message: str = "Internal server error"


class PostNotFound(BlogError):
    """No post file exists for the requested slug, or the slug is empty."""

    status_code = 404
    message = "File not found."


class MalformedPost(BlogError, ValueError):
    """The source does not split into metadata and body on the fence marker."""

    message = "Error processing blog post."


class InvalidMetadata(BlogError, ValueError):
    """The metadata block could not be decoded."""

    message = "Error processing metadata"


class PostListingError(BlogError):
    """Loading the post directory failed as a whole."""

    message = "Error loading blog posts"


class TemplateCompositionError(BlogError):
    """The template set could not be loaded or compiled."""

    message = "Error loading template"


class RenderExecutionError(BlogError):
    """A compiled template failed while executing."""

    message = "Error rendering template"
