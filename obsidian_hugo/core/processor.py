"""Content processor for rewriting internal links of Obsidian notes."""

import logging
import posixpath
import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Dict, List, Optional
from urllib.parse import quote, unquote

import inflection
import yaml

from obsidian_hugo.core.models import ObsidianDirectory, ObsidianNote, ProcessedNote
from obsidian_hugo.transforms.frontmatter import FrontmatterTransform
from obsidian_hugo.transforms.links import LinkTransform

logger = logging.getLogger(__name__)

NOTE = "note"
ASSET = "asset"


@dataclass(frozen=True)
class LinkTarget:
    """A resolved link: a note slug or an asset output path."""
    kind: str
    path: str
    name: str


@dataclass
class LinkIndex:
    """Index mapping vault paths and base names to link targets.

    Lookups are case-insensitive, like Obsidian's own link resolution.
    """

    paths: Dict[str, LinkTarget] = field(default_factory=dict)
    names: Dict[str, LinkTarget] = field(default_factory=dict)

    @classmethod
    def from_directory(cls, directory: ObsidianDirectory) -> "LinkIndex":
        """Build a link index from the retained notes and assets."""
        index = cls()

        for note in sorted(directory.notes, key=lambda n: n.source_key):
            slug = directory.links.get(note.source_key) or note.slug
            target = LinkTarget(NOTE, slug, note.name)
            key = note.source_key
            index._add(key, target)
            index._add(str(PurePosixPath(key).with_suffix("")), target)
            index.names.setdefault(note.name.casefold(), target)
            index.names.setdefault(note.path.name.casefold(), target)

        for asset in sorted(directory.assets, key=lambda a: a.source_key):
            target = LinkTarget(ASSET, str(asset.output_path), asset.path.name)
            index._add(asset.source_key, target)
            index.names.setdefault(asset.path.name.casefold(), target)

        return index

    def _add(self, key: str, target: LinkTarget) -> None:
        self.paths.setdefault(key.casefold(), target)

    def resolve(self, target: str, base_dir: Optional[str] = None) -> Optional[LinkTarget]:
        """Resolve a link target.

        Tries the path relative to base_dir, then relative to the vault
        root, then the bare file name (shortest path links). The file
        name fallback only applies to targets without a directory.

        Args:
            target: Link target as written in the note, without anchor
            base_dir: Vault-relative directory of the linking note

        Returns:
            LinkTarget or None if nothing matches
        """
        target = target.strip()
        if not target:
            return None

        candidates = []
        if base_dir:
            candidates.append(posixpath.normpath(posixpath.join(base_dir, target)))
        candidates.append(posixpath.normpath(target.lstrip("/")))

        for candidate in candidates:
            found = self.paths.get(candidate.casefold())
            if found is not None:
                return found

        # a path-qualified target names one file, never another with the same name
        if "/" in target:
            return None
        return self.names.get(target.casefold())


class ContentProcessor:
    """Processes Obsidian note content for Hugo.

    Handles:
    - Wikilinks and embeds to notes and assets
    - Markdown links and images pointing into the vault
    - Frontmatter transformation
    """

    # [[target]], [[target|alias]], ![[embed]] or [text](url), ![alt](url)
    LINK_PATTERN = re.compile(
        r'(?P<embed>!?)'
        r'(?:\[\[(?P<wiki>[^\]|]+)(?:\|(?P<alias>[^\]]*))?\]\]'
        r'|\[(?P<text>[^\]\n]*)\]\((?P<url>[^)\s]+)\))'
    )

    # URL scheme such as https: or mailto:
    SCHEME_PATTERN = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.-]*:')

    # Obsidian image size alias: ![[image.png|300]] or |300x200
    SIZE_PATTERN = re.compile(r'^\d+(?:x\d+)?$')

    def __init__(
        self,
        link_index: LinkIndex,
        link_transform: LinkTransform,
        frontmatter_transform: Optional[FrontmatterTransform] = None,
        asset_path_prefix: str = "/",
    ):
        """Initialize ContentProcessor.

        Args:
            link_index: Index of resolvable link targets
            link_transform: Transform for rendering note links
            frontmatter_transform: Optional transform for processing frontmatter
            asset_path_prefix: URL prefix for assets below static/
        """
        self.link_index = link_index
        self.link_transform = link_transform
        self.frontmatter_transform = frontmatter_transform
        self.asset_path_prefix = asset_path_prefix.rstrip('/')

    def process(self, note: ObsidianNote) -> ProcessedNote:
        """Process a note's content for publishing.

        Args:
            note: The note to process

        Returns:
            ProcessedNote with rewritten content and transformed frontmatter
        """
        referenced_assets: List[str] = []
        missing_links: List[str] = []
        base_dir = note.path.parent.as_posix()
        if base_dir == ".":
            base_dir = ""

        def replace(match: re.Match) -> str:
            if match.group("wiki") is not None:
                result = self._rewrite_wikilink(match, referenced_assets)
                target = match.group("wiki")
            else:
                target = match.group("url")
                if self._is_external(target):
                    return match.group(0)
                result = self._rewrite_markdown_link(match, base_dir, referenced_assets)

            if result is None:
                missing_links.append(target)
                logger.debug("Unresolved link in %s: %s", note.source_key, target)
                return match.group(0)
            return result

        content = self.LINK_PATTERN.sub(replace, note.body)

        front_matter = dict(note.front_matter)
        if self.frontmatter_transform:
            front_matter = self.frontmatter_transform(front_matter, note)

        return ProcessedNote(
            note=note,
            content=content,
            front_matter=front_matter,
            referenced_assets=referenced_assets,
            missing_links=missing_links,
        )

    def _rewrite_wikilink(self, match: re.Match, assets: List[str]) -> Optional[str]:
        """Rewrite a wikilink or embed, None if it does not resolve."""
        embed = bool(match.group("embed"))
        alias = match.group("alias")
        target, _, section = match.group("wiki").partition("#")
        target = target.strip()
        section = section.strip()

        if not target:
            if not section:
                return None
            # link to a section of the same note
            return f"[{alias or section}](#{self._anchor(section)})"

        resolved = self.link_index.resolve(target)
        if resolved is None:
            return None

        if resolved.kind == ASSET:
            assets.append(resolved.path)
            url = self._asset_url(resolved)
            if embed:
                alt = alias if alias and not self.SIZE_PATTERN.match(alias) else PurePosixPath(resolved.name).stem
                return f"![{alt}]({url})"
            return f"[{alias or resolved.name}]({url})"

        return self.link_transform(alias or target, resolved.path, self._anchor(section))

    def _rewrite_markdown_link(self, match: re.Match, base_dir: str, assets: List[str]) -> Optional[str]:
        """Rewrite a markdown link into the vault, None if it does not resolve."""
        target, _, section = unquote(match.group("url")).partition("#")
        resolved = self.link_index.resolve(target, base_dir)
        if resolved is None:
            return None

        embed = match.group("embed")
        text = match.group("text")
        if resolved.kind == ASSET:
            assets.append(resolved.path)
            return f"{embed}[{text}]({self._asset_url(resolved)})"

        return self.link_transform(text or resolved.name, resolved.path, self._anchor(section))

    def _is_external(self, url: str) -> bool:
        """Anchors, site-absolute paths and URLs with a scheme are not vault links."""
        return url.startswith(("#", "/")) or bool(self.SCHEME_PATTERN.match(url))

    def _asset_url(self, target: LinkTarget) -> str:
        return f"{self.asset_path_prefix}/{quote(target.path)}"

    @staticmethod
    def _anchor(section: str) -> str:
        return inflection.parameterize(section) if section else ""

    def build_output(self, processed: ProcessedNote) -> str:
        """Build final markdown output with frontmatter.

        Args:
            processed: Processed note

        Returns:
            Complete markdown string with YAML frontmatter
        """
        if processed.front_matter:
            frontmatter_str = yaml.safe_dump(
                dict(processed.front_matter),
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=True,
            )
            content = processed.content.rstrip('\n')
            return f"---\n{frontmatter_str}---\n{content}\n"
        else:
            return processed.content.rstrip('\n') + "\n"
