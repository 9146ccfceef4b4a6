"""Converter writing an Obsidian directory into a Hugo site."""

import datetime
import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from obsidian_hugo.core.discovery import load_obsidian_directory
from obsidian_hugo.core.filters import create_filter
from obsidian_hugo.core.models import (
    ConfigurationError,
    ConversionError,
    ConversionResult,
    ObsidianDirectory,
)
from obsidian_hugo.core.naming import NameConverter, NameResolver, convert_name
from obsidian_hugo.core.processor import ContentProcessor, LinkIndex
from obsidian_hugo.transforms.frontmatter import hugo_frontmatter
from obsidian_hugo.transforms.links import LINK_STYLES

logger = logging.getLogger(__name__)


@dataclass
class Converter:
    """Writes notes below content/<sub_path> and assets below static/<sub_path>."""
    obsidian_root: ObsidianDirectory
    hugo_root: Path
    sub_path: str = "posts"
    front_matter: Dict[str, Any] = field(default_factory=dict)
    tags_key: str = "tags"
    convert_name: NameConverter = convert_name
    time_zone: datetime.tzinfo = datetime.timezone.utc
    link_style: str = "absolute"

    @property
    def content_dir(self) -> Path:
        return Path(self.hugo_root) / "content" / self.sub_path

    @property
    def static_dir(self) -> Path:
        return Path(self.hugo_root) / "static" / self.sub_path

    def run(self) -> ConversionResult:
        """Convert all notes and copy all assets.

        Not transactional: on failure the files written so far are kept.

        Returns:
            ConversionResult listing written files and unresolved links

        Raises:
            ConfigurationError: Unknown link style
            ConversionError: A file could not be written
        """
        directory = self.obsidian_root
        directory.links = NameResolver(self.convert_name).resolve(directory.notes)

        processor = self._create_processor(directory)
        result = ConversionResult()

        for note in directory.notes:
            processed = processor.process(note)
            target = self.content_dir / f"{note.slug}.md"
            self._write(target, processor.build_output(processed))
            result.written_notes.append(target)
            if processed.missing_links:
                result.missing_links[note.source_key] = processed.missing_links
                logger.warning(
                    "%s: %d unresolved link(s): %s",
                    note.source_key, len(processed.missing_links), ", ".join(processed.missing_links),
                )
            logger.debug("Wrote %s -> %s", note.source_key, target)

        for asset in directory.assets:
            target = self.static_dir / asset.output_path
            self._copy(directory.root / asset.path, target)
            result.copied_assets.append(target)
            logger.debug("Copied %s -> %s", asset.source_key, target)

        logger.info(
            "Converted %d notes and %d assets into %s",
            len(result.written_notes), len(result.copied_assets), self.hugo_root,
        )
        return result

    def _create_processor(self, directory: ObsidianDirectory) -> ContentProcessor:
        link_style = LINK_STYLES.get(self.link_style)
        if link_style is None:
            raise ConfigurationError(
                f"Unknown link style {self.link_style!r}, expected one of: {', '.join(LINK_STYLES)}"
            )
        prefix = "/" + self.sub_path.strip("/")
        return ContentProcessor(
            link_index=LinkIndex.from_directory(directory),
            link_transform=link_style(prefix),
            frontmatter_transform=hugo_frontmatter(self.time_zone, self.tags_key, self.front_matter),
            asset_path_prefix=prefix,
        )

    def _write(self, target: Path, content: str) -> None:
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ConversionError(f"Failed to write {target}: {e}") from e

    def _copy(self, source: Path, target: Path) -> None:
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
        except OSError as e:
            raise ConversionError(f"Failed to copy {source} to {target}: {e}") from e


@dataclass
class ConverterConfig:
    """Plain option values for a conversion, as supplied by the CLI."""
    obsidian_root: Path
    hugo_root: Path
    sub_path: str = "posts"
    recursive: bool = False
    include_tags: List[str] = field(default_factory=list)
    exclude_tags: List[str] = field(default_factory=list)
    publish_fields: List[str] = field(default_factory=list)
    front_matter: Dict[str, Any] = field(default_factory=dict)
    tags_key: str = "tags"
    time_zone: str = "UTC"
    link_style: str = "absolute"


def parse_front_matter_pairs(pairs: Iterable[str]) -> Dict[str, str]:
    """Parse ``key:value`` strings, splitting on the first colon.

    Raises:
        ConfigurationError: A pair has no colon or an empty key
    """
    result = {}
    for pair in pairs:
        key, sep, value = pair.partition(":")
        if not sep or not key.strip():
            raise ConfigurationError(f"Front matter must be given as key:value, got {pair!r}")
        result[key.strip()] = value
    return result


def load_time_zone(name: Optional[str]) -> datetime.tzinfo:
    """Load a time zone by IANA name.

    Raises:
        ConfigurationError: The name is unknown
    """
    if not name:
        return datetime.timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(f"failed to parse time zone {name!r}: {e}") from e


def create_converter_from_config(config: ConverterConfig) -> Converter:
    """Load the vault and build a Converter from option values.

    All configuration errors surface here, before anything is written.
    """
    if config.link_style not in LINK_STYLES:
        raise ConfigurationError(f"Unknown link style {config.link_style!r}")
    time_zone = load_time_zone(config.time_zone)

    note_filter = create_filter(
        include_tags=config.include_tags,
        exclude_tags=config.exclude_tags,
        publish_fields=config.publish_fields,
    )
    directory = load_obsidian_directory(
        Path(config.obsidian_root),
        filter=note_filter,
        recursive=config.recursive,
    )

    return Converter(
        obsidian_root=directory,
        hugo_root=Path(config.hugo_root),
        sub_path=config.sub_path,
        front_matter=dict(config.front_matter),
        tags_key=config.tags_key,
        time_zone=time_zone,
        link_style=config.link_style,
    )
