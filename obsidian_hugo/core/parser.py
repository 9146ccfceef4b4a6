"""Split raw note content into YAML front matter and markdown body."""

from typing import Tuple, Union

import yaml

from obsidian_hugo.core.models import FrontMatter, FrontMatterError, MissingFrontMatterError

DELIMITER = "---"

# Scan states
_BEFORE, _META, _BODY = 0, 1, 2


def parse_front_matter_markdown(content: Union[bytes, str]) -> Tuple[FrontMatter, str]:
    """Parse a markdown file into front matter and body content.

    The front matter block must open on the first non-blank line. Only the
    first two delimiter lines are significant, any later ``---`` is body text.

    Args:
        content: Raw file content

    Returns:
        Tuple of (front matter, stripped body)

    Raises:
        MissingFrontMatterError: No front matter lines were found
        FrontMatterError: Content is not UTF-8 or the block is not a valid YAML mapping
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FrontMatterError(f"not valid UTF-8: {e}") from e
    content = content.lstrip("\ufeff")

    meta_lines = []
    body_lines = []
    state = _BEFORE

    for line in content.splitlines():
        if state < _BODY and line == DELIMITER:
            state += 1
            continue
        if state == _BEFORE:
            if not line.strip():
                continue
            # no leading delimiter, the whole file is body
            break
        if state == _META:
            meta_lines.append(line)
        else:
            body_lines.append(line)

    if state != _BODY or not meta_lines:
        raise MissingFrontMatterError("missing front matter")

    try:
        meta = yaml.safe_load("\n".join(meta_lines))
    except yaml.YAMLError as e:
        raise FrontMatterError(f"invalid YAML front matter: {e}") from e

    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise FrontMatterError(
            f"front matter must be a mapping, got {type(meta).__name__}"
        )

    return FrontMatter(meta), "\n".join(body_lines).strip()
