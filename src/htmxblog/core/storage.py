"""Storage abstraction for blog posts."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path

from htmxblog.core.exceptions import MalformedPost, PostNotFound
from htmxblog.core.models import Post
from htmxblog.core.parser import parse_post

logger = logging.getLogger(__name__)


class Storage(ABC):
    """Abstract base class for post storage."""

    @abstractmethod
    def load_all(self) -> list[Post]:
        """Load every post. Order is unspecified."""
        ...

    @abstractmethod
    def get_post(self, slug: str) -> Post:
        """Load a single post by slug. Raises PostNotFound if missing."""
        ...


class FileStorage(Storage):
    """File-based storage implementation.

    Posts are Markdown files with a fenced YAML metadata block.
    File naming: <slug>.md; subdirectories are scanned when listing.
    Nothing is cached, every call goes back to the filesystem.
    """

    def __init__(self, base_path: Path, extension: str = ".md"):
        self.base_path = base_path
        self.extension = extension

    def _slug_for(self, path: Path) -> str:
        """Derive the slug from a post's filename."""
        return path.name.removesuffix(self.extension)

    def _get_path(self, slug: str) -> Path:
        """Get full path for a slug."""
        return self.base_path / (slug + self.extension)

    def _walk(self, directory: Path) -> Iterator[Path]:
        """Yield post files below directory in lexical order.

        Directories are descended where they sort; symlinked directories
        are not followed. Errors listing a directory propagate.
        """
        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if entry.is_dir():
                if not entry.is_symlink():
                    yield from self._walk(entry)
            elif entry.is_file() and entry.name.endswith(self.extension):
                yield entry

    def load_all(self) -> list[Post]:
        """Load every post under the base path.

        Files without the fence structure are not posts and are skipped.
        Read errors and undecodable metadata abort the whole load.
        """
        posts = []
        for path in self._walk(self.base_path):
            raw = path.read_bytes()
            try:
                post = parse_post(raw)
            except MalformedPost:
                logger.debug("Skipping %s: not a post", path)
                continue
            post.slug = self._slug_for(path)
            posts.append(post)
        logger.debug("Loaded %d posts from %s", len(posts), self.base_path)
        return posts

    def get_post(self, slug: str) -> Post:
        """Load a single post by slug.

        Raises:
            PostNotFound: If the slug is empty, points outside the base
                path, or the file cannot be read.
            MalformedPost: If the file lacks the fence structure.
            InvalidMetadata: If the metadata block does not decode.
        """
        if not slug:
            raise PostNotFound("empty slug")
        path = self._get_path(slug)
        try:
            base = self.base_path.resolve()
            if not path.resolve().is_relative_to(base):
                raise PostNotFound(f"slug {slug!r} escapes {base}")
            raw = path.read_bytes()
        except (OSError, ValueError) as e:
            raise PostNotFound(f"failed to read {path}: {e}") from e
        post = parse_post(raw)
        post.slug = slug
        return post
