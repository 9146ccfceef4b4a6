"""
obsidian-hugo - Export an Obsidian vault into a Hugo site

Converts a (partial) Obsidian vault into Hugo content with support for:
- Tag and field based note filtering
- Collision free, kebab-case page names
- Wikilink and embed rewriting for notes and attachments
- Frontmatter merging and time zone normalisation
"""

from obsidian_hugo.core.models import (
    ConversionResult,
    FrontMatter,
    ObsidianAsset,
    ObsidianDirectory,
    ObsidianHugoError,
    ObsidianNote,
)
from obsidian_hugo.core.discovery import load_obsidian_directory
from obsidian_hugo.core.filters import create_filter
from obsidian_hugo.core.naming import convert_name, sanitize
from obsidian_hugo.core.converter import Converter, ConverterConfig, create_converter_from_config

__version__ = "0.1.0"

__all__ = [
    "ConversionResult",
    "FrontMatter",
    "ObsidianAsset",
    "ObsidianDirectory",
    "ObsidianHugoError",
    "ObsidianNote",
    "load_obsidian_directory",
    "create_filter",
    "convert_name",
    "sanitize",
    "Converter",
    "ConverterConfig",
    "create_converter_from_config",
]
