"""Data models for HTMX Blog."""

from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PostMetadata(BaseModel):
    """Metadata decoded from the YAML block at the top of a post.

    Unknown keys are ignored; missing keys fall back to empty values.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = ""
    date: datetime | None = None
    description: str = ""
    image: str = ""

    @field_validator("title", "description", "image", mode="before")
    @classmethod
    def _coerce_text(cls, value: object) -> object:
        """Blank keys read as empty text; other scalars read as their text."""
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float, date)):
            return value.isoformat() if isinstance(value, date) else str(value)
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: object) -> object:
        """YAML yields bare dates for `2024-01-01`; treat them as midnight."""
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, time.min)
        return value

    @field_validator("date")
    @classmethod
    def _ensure_aware(cls, value: datetime | None) -> datetime | None:
        """Naive timestamps are taken as UTC so posts stay comparable."""
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class Post(BaseModel):
    """A single blog post: decoded metadata plus rendered body."""

    title: str = ""
    date: datetime | None = None
    description: str = ""
    hero_image: str = ""
    slug: str = ""
    body_html: str = ""

    @classmethod
    def from_metadata(cls, metadata: PostMetadata, body_html: str) -> "Post":
        """Build a post from decoded metadata; the slug is left for the caller."""
        return cls(
            title=metadata.title,
            date=metadata.date,
            description=metadata.description,
            hero_image=metadata.image,
            body_html=body_html,
        )


class PageKind(str, Enum):
    """Selects which content region the shared layout renders."""

    HOME = "home"
    LIST = "list"
    SINGLE = "single"


class _BaseView(BaseModel):
    title: str
    is_fragment: bool = False


class HomeView(_BaseView):
    """View data for the homepage."""

    page_kind: Literal[PageKind.HOME] = PageKind.HOME


class ListView(_BaseView):
    """View data for the post listing, posts already ordered."""

    page_kind: Literal[PageKind.LIST] = PageKind.LIST
    posts: list[Post] = Field(default_factory=list)


class SingleView(_BaseView):
    """View data for one rendered post."""

    page_kind: Literal[PageKind.SINGLE] = PageKind.SINGLE
    content: str = ""
    description: str = ""
    hero_image: str = ""
    date: datetime | None = None


PageView = Annotated[
    Union[HomeView, ListView, SingleView],
    Field(discriminator="page_kind"),
]
