"""Post parser: YAML metadata block plus Markdown body."""

import yaml
from markdown import Markdown
from markdown.extensions import Extension
from markdown.inlinepatterns import SimpleTagInlineProcessor
from pydantic import ValidationError

from htmxblog.core.exceptions import InvalidMetadata, MalformedPost
from htmxblog.core.models import Post, PostMetadata

# Literal marker fencing the metadata block
FENCE = "---"

# Pattern for strikethrough: ~~text~~
# Group 2 must contain the text (SimpleTagInlineProcessor expectation)
STRIKETHROUGH_PATTERN = r"(~~)(.*?)~~"


class StrikethroughExtension(Extension):
    """Markdown extension for ~~strikethrough~~ text."""

    def extendMarkdown(self, md: Markdown) -> None:
        """Add strikethrough pattern to markdown parser."""
        md.inlinePatterns.register(
            SimpleTagInlineProcessor(STRIKETHROUGH_PATTERN, "del"),
            "strikethrough",
            50,
        )


def create_markdown() -> Markdown:
    """Create a Markdown converter for post bodies.

    Converters keep state between calls, so callers get a fresh one each
    time instead of sharing an instance across requests.
    """
    return Markdown(
        extensions=[
            "extra",  # Includes: abbreviations, attr_list, def_list, fenced_code, footnotes, md_in_html, tables
            "sane_lists",
            "pymdownx.tasklist",
            StrikethroughExtension(),
        ]
    )


def render_markdown(body: str) -> str:
    """Convert a Markdown body to an HTML fragment."""
    return create_markdown().convert(body)


def split_post(text: str) -> tuple[str, str]:
    """Split raw post text into (metadata block, body).

    The text is cut at the first two fence markers only, so a fence
    inside the body survives. Fewer than two markers is malformed.

    Raises:
        MalformedPost: If the text has fewer than three segments.
    """
    parts = text.split(FENCE, 2)
    if len(parts) < 3:
        raise MalformedPost(f"expected 3 segments around {FENCE!r}, found {len(parts)}")
    return parts[1], parts[2]


def parse_metadata(block: str) -> PostMetadata:
    """Decode the YAML metadata block.

    Raises:
        InvalidMetadata: On YAML syntax errors, a non-mapping document, or
            field values of the wrong type.
    """
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as e:
        raise InvalidMetadata(f"invalid YAML: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidMetadata(f"expected a mapping, got {type(data).__name__}")
    try:
        return PostMetadata.model_validate(data)
    except ValidationError as e:
        raise InvalidMetadata(f"invalid metadata fields: {e}") from e


def parse_post(raw: bytes) -> Post:
    """Parse the complete contents of a post file.

    The returned post has no slug; only the caller knows the filename.

    Raises:
        MalformedPost: If the fence structure is missing.
        InvalidMetadata: If the metadata block does not decode.
    """
    text = raw.decode("utf-8", errors="replace")
    block, body = split_post(text)
    metadata = parse_metadata(block)
    return Post.from_metadata(metadata, render_markdown(body))
