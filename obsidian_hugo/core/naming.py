"""Derive destination names for notes."""

import hashlib
import logging
import re
from pathlib import PurePosixPath
from typing import Callable, Dict, Iterable

import inflection

from obsidian_hugo.core.models import ObsidianAsset, ObsidianNote

logger = logging.getLogger(__name__)

NameConverter = Callable[[str], str]

_DISALLOWED = re.compile(r"[^\w-]")
_SEPARATORS = re.compile(r"[\s_]+")
_DASHES = re.compile(r"-{2,}")


def sanitize(name: str) -> str:
    """Remove every character that is not a letter, digit, '_' or '-'.

    >>> sanitize("a B 1")
    'aB1'
    """
    return _DISALLOWED.sub("", name)


def to_kebab(name: str) -> str:
    """Convert a name to lower kebab case, e.g. ``NoteTitle A`` -> ``note-title-a``."""
    snake = inflection.underscore(name.strip())
    return _SEPARATORS.sub("-", snake).strip("-")


def convert_name(name: str) -> str:
    """Default naming policy: kebab case, then sanitize."""
    return _DASHES.sub("-", sanitize(to_kebab(name))).strip("-")


def _discriminator(key: str) -> str:
    return hashlib.sha1(key.encode("utf-8")).hexdigest()[:6]


class NameResolver:
    """Assigns unique output slugs to notes."""

    def __init__(self, convert_name: NameConverter = convert_name):
        self.convert_name = convert_name

    def resolve(self, notes: Iterable[ObsidianNote]) -> Dict[str, str]:
        """Assign a slug to every note.

        Notes are visited in source path order, the first note claiming a
        slug keeps it. Later claimants get a suffix derived from their
        source path, so the outcome does not depend on walk order.

        Args:
            notes: Notes to name, slugs are set in place

        Returns:
            Mapping of source path (POSIX) to slug
        """
        taken = set()
        links = {}

        for note in sorted(notes, key=lambda n: n.source_key):
            key = note.source_key
            base = self.convert_name(note.name)
            slug = base
            if not slug:
                slug = f"note-{_discriminator(key)}"
            elif slug in taken:
                slug = f"{base}-{_discriminator(key)}"
                logger.debug("Slug collision for %s, using %s", key, slug)

            candidate, counter = slug, 1
            while candidate in taken:
                counter += 1
                candidate = f"{slug}-{counter}"

            taken.add(candidate)
            note.slug = candidate
            links[key] = candidate

        return links


def resolve_asset_paths(assets: Iterable[ObsidianAsset]) -> None:
    """Give every asset a distinct output path.

    Lower-casing directories can map two assets onto one file. Assets are
    visited in source path order, later claimants get a suffix derived from
    their source path before the extension. Paths are compared
    case-insensitively so the result also holds on case-insensitive file
    systems.
    """
    taken = set()

    for asset in sorted(assets, key=lambda a: a.source_key):
        default = asset.default_output_path
        candidate = default
        if str(candidate).casefold() in taken:
            stem = f"{default.stem}-{_discriminator(asset.source_key)}"
            candidate = default.with_name(f"{stem}{default.suffix}")
            counter = 1
            while str(candidate).casefold() in taken:
                counter += 1
                candidate = default.with_name(f"{stem}-{counter}{default.suffix}")
            logger.debug("Output path collision for %s, using %s", asset.source_key, candidate)

        taken.add(str(candidate).casefold())
        asset.output = None if candidate == default else PurePosixPath(candidate)
