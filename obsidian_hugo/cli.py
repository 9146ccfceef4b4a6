"""
Command line entry point for obsidian-hugo.

Usage:
  obsidian-hugo -O path/to/vault -H path/to/hugo
  obsidian-hugo -O vault -H site -p notes -R -i blog -e draft
  obsidian-hugo -O vault -H site -F author:me -F draft:false -t categories
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import tzlocal

from obsidian_hugo import __version__
from obsidian_hugo.core.converter import ConverterConfig, create_converter_from_config, parse_front_matter_pairs
from obsidian_hugo.core.models import ObsidianHugoError
from obsidian_hugo.transforms.links import LINK_STYLES

logger = logging.getLogger("obsidian_hugo")


def default_time_zone() -> str:
    """IANA name of the local time zone, UTC if it cannot be determined."""
    try:
        name = tzlocal.get_localzone_name()
    except (LookupError, ValueError, OSError) as e:
        logger.debug("Cannot determine local time zone: %s", e)
        return "UTC"
    return name or "UTC"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="obsidian-hugo",
        description="Command line tool to export an Obsidian vault to Hugo.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-O", "--obsidian-root", type=Path, required=True,
        help="Path to root of Obsidian vault",
    )
    parser.add_argument(
        "-H", "--hugo-root", type=Path, required=True,
        help="Path to root of Hugo setup",
    )
    parser.add_argument(
        "-p", "--sub-path", default="posts",
        help="Sub-path used in Hugo setup below content and static (default: %(default)s)",
    )
    parser.add_argument(
        "-i", "--include-tag", action="append", default=[], metavar="TAG",
        help="Tag to include (accepts all, if unset)",
    )
    parser.add_argument(
        "-e", "--exclude-tag", action="append", default=[], metavar="TAG",
        help="Tag to exclude (rejects none, if unset)",
    )
    parser.add_argument(
        "-P", "--publish-field", action="append", default=[], metavar="KEY",
        help="Only publish notes defining at least one of these front matter keys",
    )
    parser.add_argument(
        "-F", "--front-matter", action="append", default=[], metavar="KEY:VALUE",
        help="Additional front matter added to all generated Hugo pages, overriding the note's own",
    )
    parser.add_argument(
        "-t", "--tags-key", default="tags",
        help="Front matter key to write tags to, so that Hugo taxonomies can be used (default: %(default)s)",
    )
    parser.add_argument(
        "-R", "--recursive", action="store_true",
        help="Recurse into subdirectories of the Obsidian root",
    )
    parser.add_argument(
        "-z", "--time-zone", default=default_time_zone(),
        help="The time zone all output dates should have (default: %(default)s)",
    )
    parser.add_argument(
        "-l", "--link-style", choices=sorted(LINK_STYLES), default="absolute",
        help="How links between notes are written (default: %(default)s)",
    )
    parser.add_argument(
        "-D", "--debug", action="store_true",
        help="Enable debug logs",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        config = ConverterConfig(
            obsidian_root=args.obsidian_root,
            hugo_root=args.hugo_root,
            sub_path=args.sub_path,
            recursive=args.recursive,
            include_tags=args.include_tag,
            exclude_tags=args.exclude_tag,
            publish_fields=args.publish_field,
            front_matter=parse_front_matter_pairs(args.front_matter),
            tags_key=args.tags_key,
            time_zone=args.time_zone,
            link_style=args.link_style,
        )
        converter = create_converter_from_config(config)
        result = converter.run()
    except ObsidianHugoError as e:
        logger.error("%s", e)
        return 1

    print(f"Wrote {len(result.written_notes)} notes and {len(result.copied_assets)} assets.")
    if result.missing_links:
        print(f"{len(result.missing_links)} note(s) contain unresolved links.", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
