"""Link transform factories.

A link transform turns a resolved note reference into markdown. It is
called as ``transform(text, slug, anchor)`` where anchor is an already
slugified section name or empty.
"""

from typing import Callable

LinkTransform = Callable[[str, str, str], str]


def _fragment(anchor: str) -> str:
    return f"#{anchor}" if anchor else ""


def relative_link() -> LinkTransform:
    """Create a transform producing links relative to the current page.

    Returns:
        A transform function (text, slug, anchor) -> markdown link
    """
    def transform(text: str, slug: str, anchor: str = "") -> str:
        return f"[{text}]({slug}.md{_fragment(anchor)})"
    return transform


def absolute_link(prefix: str = "") -> LinkTransform:
    """Create a transform producing site-absolute links.

    Args:
        prefix: URL prefix, usually the Hugo sub-path (e.g. "/posts")

    Returns:
        A transform function (text, slug, anchor) -> markdown link
    """
    prefix = "/" + prefix.strip("/") if prefix.strip("/") else ""

    def transform(text: str, slug: str, anchor: str = "") -> str:
        return f"[{text}]({prefix}/{slug}{_fragment(anchor)})"
    return transform


def hugo_ref(prefix: str = "") -> LinkTransform:
    """Create a transform producing Hugo ``ref`` shortcodes.

    Hugo fails the build on a ref to a missing page, so broken links surface
    early.
    """
    prefix = prefix.strip("/")

    def transform(text: str, slug: str, anchor: str = "") -> str:
        target = f"{prefix}/{slug}.md" if prefix else f"{slug}.md"
        return f'[{text}]({{{{< ref "{target}{_fragment(anchor)}" >}}}})'
    return transform


LINK_STYLES = {
    "absolute": absolute_link,
    "relative": lambda prefix="": relative_link(),
    "ref": hugo_ref,
}
