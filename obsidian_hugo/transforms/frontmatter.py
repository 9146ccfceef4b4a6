"""Frontmatter transform factories for obsidian-hugo.

These factories create transform functions that turn a note's own front
matter into the front matter of the generated Hugo page.
"""

import datetime
from typing import Any, Callable, Dict, Optional, TYPE_CHECKING

import titlecase as tc

if TYPE_CHECKING:
    from obsidian_hugo.core.models import ObsidianNote

FrontmatterTransform = Callable[[Dict[str, Any], "ObsidianNote"], Dict[str, Any]]


def add_fields(fields: Optional[Dict[str, Any]] = None) -> FrontmatterTransform:
    """Create a transform that adds fields, overriding existing keys.

    Args:
        fields: Dict of fields to add/update

    Returns:
        A transform function
    """
    def transform(fm: Dict[str, Any], note: "ObsidianNote") -> Dict[str, Any]:
        result = dict(fm)
        if fields:
            result.update(fields)
        return result
    return transform


def rename_tags(tags_key: str = "tags") -> FrontmatterTransform:
    """Create a transform that moves the note's tags below tags_key.

    Hugo taxonomies are keyed by name, so the vault's ``tags`` list may
    need to land on e.g. ``categories``.
    """
    def transform(fm: Dict[str, Any], note: "ObsidianNote") -> Dict[str, Any]:
        result = dict(fm)
        if tags_key != "tags" and "tags" in result:
            result[tags_key] = result.pop("tags")
        return result
    return transform


def default_title() -> FrontmatterTransform:
    """Create a transform that adds a title derived from the file name.

    Title is converted to proper title case using the titlecase library.
    Existing titles are kept.
    """
    def transform(fm: Dict[str, Any], note: "ObsidianNote") -> Dict[str, Any]:
        result = dict(fm)
        if not result.get("title"):
            result["title"] = tc.titlecase(note.name)
        return result
    return transform


def localize_dates(time_zone: datetime.tzinfo) -> FrontmatterTransform:
    """Create a transform that expresses all datetimes in time_zone.

    Naive datetimes are taken to be in time_zone already. Values are
    written as ISO 8601 strings, plain dates are left alone.

    Args:
        time_zone: Output time zone

    Returns:
        A transform function
    """
    def convert(value: Any) -> Any:
        if isinstance(value, datetime.datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=time_zone)
            else:
                value = value.astimezone(time_zone)
            return value.isoformat()
        return value

    def transform(fm: Dict[str, Any], note: "ObsidianNote") -> Dict[str, Any]:
        return {k: convert(v) for k, v in fm.items()}
    return transform


def compose(*transforms: FrontmatterTransform) -> FrontmatterTransform:
    """Chain transforms, applied left to right."""
    def transform(fm: Dict[str, Any], note: "ObsidianNote") -> Dict[str, Any]:
        result = dict(fm)
        for t in transforms:
            result = t(result, note)
        return result
    return transform


def hugo_frontmatter(
    time_zone: datetime.tzinfo,
    tags_key: str = "tags",
    extra: Optional[Dict[str, Any]] = None,
) -> FrontmatterTransform:
    """Create the standard transform for Hugo pages.

    Order matters: extra fields are merged last, so they win over the
    note's own values.
    """
    return compose(
        default_title(),
        localize_dates(time_zone),
        rename_tags(tags_key),
        add_fields(extra),
    )
