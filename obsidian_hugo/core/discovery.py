"""Vault discovery module for loading notes and assets."""

import logging
from pathlib import Path
from typing import Iterator, List, Optional

from obsidian_hugo.core.filters import FilterPipeline, ObsidianFilter
from obsidian_hugo.core.models import (
    ConfigurationError,
    FrontMatter,
    FrontMatterError,
    MissingFrontMatterError,
    ObsidianAsset,
    ObsidianDirectory,
    ObsidianNote,
)
from obsidian_hugo.core.naming import NameConverter, NameResolver, convert_name, resolve_asset_paths
from obsidian_hugo.core.parser import parse_front_matter_markdown

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = frozenset({".md", ".markdown"})


class VaultLoader:
    """Walks an Obsidian vault and builds the set of notes and assets."""

    def __init__(
        self,
        vault_path: Path,
        filter: Optional[ObsidianFilter] = None,
        recursive: bool = False,
        convert_name: NameConverter = convert_name,
    ):
        """Initialize VaultLoader.

        Args:
            vault_path: Path to the Obsidian vault root
            filter: Predicate deciding which notes are kept (None keeps all)
            recursive: Whether to descend into subdirectories
            convert_name: Naming policy for note slugs
        """
        self.vault_path = Path(vault_path)
        self.filter = filter
        self.recursive = recursive
        self.convert_name = convert_name

    def load(self) -> ObsidianDirectory:
        """Load all notes and assets of the vault.

        Returns:
            ObsidianDirectory with filtered, slugged notes and all assets

        Raises:
            ConfigurationError: The vault root or a note cannot be read
            FrontMatterError: A note is not UTF-8 or has malformed front matter
        """
        if not self.vault_path.is_dir():
            raise ConfigurationError(f"Obsidian root is not a directory: {self.vault_path}")

        notes: List[ObsidianNote] = []
        assets: List[ObsidianAsset] = []

        for file_path in self._iter_files():
            relative = file_path.relative_to(self.vault_path)
            if file_path.suffix.lower() in MARKDOWN_EXTENSIONS:
                notes.append(self._load_note(file_path, relative))
            else:
                assets.append(ObsidianAsset(path=relative))

        discovered = len(notes)
        if self.filter is not None:
            notes = [note for note in notes if self._accepts(note)]

        directory = ObsidianDirectory(root=self.vault_path, notes=notes, assets=assets)
        directory.links = NameResolver(self.convert_name).resolve(notes)
        resolve_asset_paths(assets)

        logger.info(
            "Loaded %d of %d notes and %d assets from %s",
            len(notes), discovered, len(assets), self.vault_path,
        )
        return directory

    def _iter_files(self) -> Iterator[Path]:
        """Yield regular files in sorted order, skipping hidden entries."""
        try:
            candidates = self.vault_path.rglob("*") if self.recursive else self.vault_path.iterdir()
            entries = sorted(candidates)
        except OSError as e:
            raise ConfigurationError(f"Cannot read Obsidian root {self.vault_path}: {e}") from e

        for path in entries:
            relative = path.relative_to(self.vault_path)
            if any(part.startswith(".") for part in relative.parts):
                continue
            if path.is_file():
                yield path

    def _load_note(self, file_path: Path, relative: Path) -> ObsidianNote:
        """Parse a note file.

        Args:
            file_path: Absolute path to the markdown file
            relative: Path relative to the vault root

        Returns:
            ObsidianNote with an empty slug
        """
        try:
            content = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise FrontMatterError(f"{relative.as_posix()}: not valid UTF-8: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read note {relative.as_posix()}: {e}") from e

        try:
            front_matter, body = parse_front_matter_markdown(content)
        except MissingFrontMatterError:
            logger.debug("No front matter in %s", relative)
            return ObsidianNote(
                path=relative,
                front_matter=FrontMatter(),
                body=content.lstrip("\ufeff").strip(),
            )
        except FrontMatterError as e:
            raise FrontMatterError(f"{relative.as_posix()}: {e}") from e

        return ObsidianNote(path=relative, front_matter=front_matter, body=body)

    def _accepts(self, note: ObsidianNote) -> bool:
        if isinstance(self.filter, FilterPipeline):
            accepted, reason = self.filter.check(note)
        else:
            accepted, reason = self.filter(note), "Rejected by filter"
        if not accepted:
            logger.debug("Skipping %s: %s", note.source_key, reason)
        return accepted


def load_obsidian_directory(
    root: Path,
    filter: Optional[ObsidianFilter] = None,
    recursive: bool = False,
    convert_name: NameConverter = convert_name,
) -> ObsidianDirectory:
    """Load an Obsidian vault, see VaultLoader.load."""
    return VaultLoader(root, filter=filter, recursive=recursive, convert_name=convert_name).load()
