"""Ordering of posts and assembly of per-page view data."""

from collections.abc import Iterable
from datetime import datetime, timezone

from htmxblog.core.models import HomeView, ListView, Post, SingleView

# Posts without a date sort after every dated post
_UNDATED = datetime.min.replace(tzinfo=timezone.utc)


def sort_posts(posts: Iterable[Post]) -> list[Post]:
    """Return posts newest first.

    The sort is stable: posts with equal dates keep their scan order.
    """
    return sorted(posts, key=lambda p: p.date or _UNDATED, reverse=True)


def build_home_view(title: str, is_fragment: bool = False) -> HomeView:
    """View data for the homepage."""
    return HomeView(title=title, is_fragment=is_fragment)


def build_list_view(
    posts: Iterable[Post], title: str, is_fragment: bool = False
) -> ListView:
    """View data for the post listing, newest post first."""
    return ListView(title=title, posts=sort_posts(posts), is_fragment=is_fragment)


def build_single_view(post: Post, is_fragment: bool = False) -> SingleView:
    """View data for a single post page."""
    return SingleView(
        title=post.title,
        content=post.body_html,
        description=post.description,
        hero_image=post.hero_image,
        date=post.date,
        is_fragment=is_fragment,
    )
