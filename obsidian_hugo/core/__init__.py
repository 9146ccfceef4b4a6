"""Core components for obsidian-hugo."""

from obsidian_hugo.core.models import (
    ConfigurationError,
    ConversionError,
    ConversionResult,
    FrontMatter,
    FrontMatterError,
    MissingFrontMatterError,
    ObsidianAsset,
    ObsidianDirectory,
    ObsidianHugoError,
    ObsidianNote,
    ProcessedNote,
)
from obsidian_hugo.core.parser import parse_front_matter_markdown
from obsidian_hugo.core.filters import FieldPresence, FilterPipeline, TagExclude, TagInclude, create_filter
from obsidian_hugo.core.naming import NameResolver, convert_name, sanitize, to_kebab
from obsidian_hugo.core.discovery import VaultLoader, load_obsidian_directory
from obsidian_hugo.core.processor import ContentProcessor, LinkIndex
from obsidian_hugo.core.converter import Converter, ConverterConfig, create_converter_from_config

__all__ = [
    "ConfigurationError",
    "ConversionError",
    "ConversionResult",
    "FrontMatter",
    "FrontMatterError",
    "MissingFrontMatterError",
    "ObsidianAsset",
    "ObsidianDirectory",
    "ObsidianHugoError",
    "ObsidianNote",
    "ProcessedNote",
    "parse_front_matter_markdown",
    "FieldPresence",
    "FilterPipeline",
    "TagExclude",
    "TagInclude",
    "create_filter",
    "NameResolver",
    "convert_name",
    "sanitize",
    "to_kebab",
    "VaultLoader",
    "load_obsidian_directory",
    "ContentProcessor",
    "LinkIndex",
    "Converter",
    "ConverterConfig",
    "create_converter_from_config",
]
