"""Data models for obsidian-hugo."""

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Dict, List, Optional


class ObsidianHugoError(Exception):
    """Base class for all conversion errors."""


class ConfigurationError(ObsidianHugoError):
    """Invalid input configuration, raised before any output is written."""


class FrontMatterError(ObsidianHugoError):
    """The front matter block of a note is not a valid YAML mapping."""


class MissingFrontMatterError(ObsidianHugoError):
    """The note has no front matter block. Not fatal."""


class ConversionError(ObsidianHugoError):
    """Writing the Hugo tree failed part way through."""


def _to_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


class FrontMatter(dict):
    """Meta information of a markdown document.

    A thin accessor over the loosely typed mapping produced by the YAML
    decoder. Lookups never fail: a missing key yields an empty value.
    """

    def has(self, key: str) -> bool:
        """Check if a specific key exists in the front matter."""
        return key in self

    def string(self, key: str) -> str:
        """Get the value for key as a string, empty if absent."""
        if key not in self:
            return ""
        return _to_string(self[key])

    def strings(self, key: str) -> Optional[List[str]]:
        """Get the value for key as a list of strings.

        Returns None if the key is absent or the value is not a list.
        """
        value = self.get(key)
        if not isinstance(value, (list, tuple)):
            return None
        return [_to_string(v) for v in value]


@dataclass
class ObsidianNote:
    """A markdown note of the vault.

    The slug stays empty until the NameResolver assigns it.
    """
    path: Path
    front_matter: FrontMatter
    body: str
    slug: str = ""

    @property
    def name(self) -> str:
        """Base name of the note without its extension."""
        return self.path.stem

    @property
    def source_key(self) -> str:
        """Vault-relative POSIX path, used as lookup key."""
        return self.path.as_posix()


@dataclass
class ObsidianAsset:
    """Any non-markdown file of the vault.

    output is set by the loader when the default output path collides.
    """
    path: Path
    output: Optional[PurePosixPath] = None

    @property
    def source_key(self) -> str:
        return self.path.as_posix()

    @property
    def output_path(self) -> PurePosixPath:
        """Destination path below static/<sub-path>.

        The base name is kept, directory names are lower-cased.
        """
        if self.output is not None:
            return self.output
        return self.default_output_path

    @property
    def default_output_path(self) -> PurePosixPath:
        parents = [part.lower() for part in self.path.parent.parts if part not in ("", ".")]
        return PurePosixPath(*parents, self.path.name)


@dataclass
class ObsidianDirectory:
    """Result of a vault walk: retained notes, assets and the slug table."""
    root: Path
    notes: List[ObsidianNote] = field(default_factory=list)
    assets: List[ObsidianAsset] = field(default_factory=list)
    links: Dict[str, str] = field(default_factory=dict)


@dataclass
class ProcessedNote:
    """Result of rewriting a note for Hugo."""
    note: ObsidianNote
    content: str
    front_matter: Dict[str, Any]
    referenced_assets: List[str]
    missing_links: List[str]


@dataclass
class ConversionResult:
    """Result of a conversion run."""
    written_notes: List[Path] = field(default_factory=list)
    copied_assets: List[Path] = field(default_factory=list)
    missing_links: Dict[str, List[str]] = field(default_factory=dict)
