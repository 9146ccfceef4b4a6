"""Note filters deciding which notes get published."""

from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterable, Optional, Tuple

from obsidian_hugo.core.models import ObsidianNote

ObsidianFilter = Callable[[ObsidianNote], bool]


@dataclass(frozen=True)
class TagInclude:
    """Accept notes carrying at least one of the given tags."""
    tags: FrozenSet[str]
    key: str = "tags"

    def __call__(self, note: ObsidianNote) -> bool:
        return not self.tags.isdisjoint(note.front_matter.strings(self.key) or [])

    def describe(self) -> str:
        return f"Missing required tags: {', '.join(sorted(self.tags))}"


@dataclass(frozen=True)
class TagExclude:
    """Reject notes carrying any of the given tags."""
    tags: FrozenSet[str]
    key: str = "tags"

    def __call__(self, note: ObsidianNote) -> bool:
        return self.tags.isdisjoint(note.front_matter.strings(self.key) or [])

    def describe(self) -> str:
        return f"Contains excluded tags: {', '.join(sorted(self.tags))}"


@dataclass(frozen=True)
class FieldPresence:
    """Accept notes that define at least one of the given front matter keys."""
    fields: FrozenSet[str]

    def __call__(self, note: ObsidianNote) -> bool:
        return any(note.front_matter.has(f) for f in self.fields)

    def describe(self) -> str:
        return f"Missing publish fields: {', '.join(sorted(self.fields))}"


@dataclass(frozen=True)
class FilterPipeline:
    """Conjunction of predicates, evaluated in order until one rejects."""
    predicates: Tuple[ObsidianFilter, ...]

    def __call__(self, note: ObsidianNote) -> bool:
        return all(predicate(note) for predicate in self.predicates)

    def check(self, note: ObsidianNote) -> Tuple[bool, str]:
        """Check a note against all predicates.

        Args:
            note: Note to check

        Returns:
            Tuple of (accepted, reason)
        """
        for predicate in self.predicates:
            if not predicate(note):
                describe = getattr(predicate, "describe", None)
                return False, describe() if describe else f"Rejected by {predicate!r}"
        return True, "OK"


def create_filter(
    include_tags: Optional[Iterable[str]] = None,
    exclude_tags: Optional[Iterable[str]] = None,
    publish_fields: Optional[Iterable[str]] = None,
    tags_key: str = "tags",
) -> Optional[FilterPipeline]:
    """Build the filter pipeline from plain option values.

    Only predicates with a non-empty set are added. Without any, None is
    returned, meaning every note is accepted.
    """
    predicates = []
    included = frozenset(include_tags or ())
    if included:
        predicates.append(TagInclude(included, tags_key))

    excluded = frozenset(exclude_tags or ())
    if excluded:
        predicates.append(TagExclude(excluded, tags_key))

    fields = frozenset(publish_fields or ())
    if fields:
        predicates.append(FieldPresence(fields))

    if not predicates:
        return None
    return FilterPipeline(tuple(predicates))
