"""Tests for ContentProcessor and LinkIndex."""

import datetime
from pathlib import Path

import pytest

from obsidian_hugo.core.models import FrontMatter, ObsidianAsset, ObsidianDirectory, ObsidianNote
from obsidian_hugo.core.naming import NameResolver
from obsidian_hugo.core.processor import ASSET, NOTE, ContentProcessor, LinkIndex
from obsidian_hugo.transforms.frontmatter import hugo_frontmatter
from obsidian_hugo.transforms.links import absolute_link, hugo_ref, relative_link


def _note(path: str, body: str = "", **front_matter) -> ObsidianNote:
    return ObsidianNote(path=Path(path), front_matter=FrontMatter(front_matter), body=body)


def _directory(notes, assets=()) -> ObsidianDirectory:
    directory = ObsidianDirectory(
        root=Path("vault"),
        notes=list(notes),
        assets=[ObsidianAsset(path=Path(a)) for a in assets],
    )
    directory.links = NameResolver().resolve(directory.notes)
    return directory


@pytest.fixture
def directory():
    return _directory(
        [
            _note("First Note.md"),
            _note("Second Note.md"),
            _note("Folder/Deep Note.md"),
        ],
        ["diagram.png", "Attachments/My Photo.jpg", "docs/paper.pdf"],
    )


@pytest.fixture
def link_index(directory):
    return LinkIndex.from_directory(directory)


@pytest.fixture
def processor(link_index):
    return ContentProcessor(
        link_index=link_index,
        link_transform=absolute_link("/posts"),
        asset_path_prefix="/posts",
    )


class TestLinkIndex:
    """Tests for LinkIndex class."""

    def test_resolve_by_name(self, link_index):
        target = link_index.resolve("First Note")
        assert target.kind == NOTE
        assert target.path == "first-note"

    def test_case_insensitive(self, link_index):
        assert link_index.resolve("first note").path == "first-note"
        assert link_index.resolve("FIRST NOTE").path == "first-note"

    def test_resolve_by_path(self, link_index):
        assert link_index.resolve("Folder/Deep Note").path == "deep-note"
        assert link_index.resolve("Folder/Deep Note.md").path == "deep-note"
        assert link_index.resolve("Deep Note").path == "deep-note"

    def test_resolve_with_extension(self, link_index):
        assert link_index.resolve("First Note.md").path == "first-note"

    def test_resolve_relative(self, link_index):
        assert link_index.resolve("../First Note.md", "Folder").path == "first-note"
        assert link_index.resolve("Deep Note.md", "Folder").path == "deep-note"

    def test_resolve_asset(self, link_index):
        target = link_index.resolve("paper.pdf")
        assert target.kind == ASSET
        assert target.path == "docs/paper.pdf"
        assert link_index.resolve("Attachments/My Photo.jpg").path == "attachments/My Photo.jpg"

    def test_path_target_needs_exact_path(self, link_index):
        assert link_index.resolve("Other/First Note") is None
        assert link_index.resolve("Other/diagram.png") is None
        assert link_index.resolve("First Note").path == "first-note"

    def test_missing(self, link_index):
        assert link_index.resolve("Nonexistent") is None
        assert link_index.resolve("") is None
        assert link_index.resolve("   ") is None

    def test_ambiguous_name_prefers_first_path(self):
        index = LinkIndex.from_directory(_directory([_note("b/Topic.md"), _note("a/Topic.md")]))

        assert index.resolve("Topic").path == "topic"
        assert index.resolve("b/Topic").path != "topic"


class TestWikilinks:
    """Tests for wikilink and embed rewriting."""

    def test_simple_wikilink(self, processor):
        result = processor.process(_note("Test.md", "Check out [[First Note]] for more info."))
        assert result.content == "Check out [First Note](/posts/first-note) for more info."

    def test_wikilink_with_display_text(self, processor):
        result = processor.process(_note("Test.md", "See [[First Note|this article]] here."))
        assert "[this article](/posts/first-note)" in result.content

    def test_display_text_with_pipe(self, processor):
        result = processor.process(_note("Test.md", "See [[First Note|A|B|C]]"))
        assert "[A|B|C](/posts/first-note)" in result.content

    def test_section_link(self, processor):
        result = processor.process(_note("Test.md", "See [[First Note#Introduction]]."))
        assert "[First Note](/posts/first-note#introduction)" in result.content

    def test_section_link_with_display_text(self, processor):
        result = processor.process(_note("Test.md", "See [[First Note#Section|the section]]."))
        assert "[the section](/posts/first-note#section)" in result.content

    def test_section_only_link(self, processor):
        result = processor.process(_note("Test.md", "See [[#My Section]]"))
        assert result.content == "See [My Section](#my-section)"

    def test_path_and_case(self, processor):
        result = processor.process(_note("Test.md", "[[Folder/Deep Note]] and [[deep note]]"))
        assert result.content == "[Folder/Deep Note](/posts/deep-note) and [deep note](/posts/deep-note)"

    def test_multiple_and_consecutive(self, processor):
        result = processor.process(_note("Test.md", "[[First Note]][[First Note]] and [[Second Note]]"))
        assert result.content.count("[First Note](/posts/first-note)") == 2
        assert "[Second Note](/posts/second-note)" in result.content

    def test_note_embed_becomes_link(self, processor):
        result = processor.process(_note("Test.md", "![[Second Note]]"))
        assert result.content == "[Second Note](/posts/second-note)"

    def test_image_embed(self, processor):
        result = processor.process(_note("Test.md", "Here's an image: ![[diagram.png]]"))
        assert result.content == "Here's an image: ![diagram](/posts/diagram.png)"
        assert result.referenced_assets == ["diagram.png"]

    def test_image_embed_with_alt_text_and_spaces(self, processor):
        result = processor.process(_note("Test.md", "![[My Photo.jpg|Vacation]]"))
        assert result.content == "![Vacation](/posts/attachments/My%20Photo.jpg)"

    def test_image_embed_with_size(self, processor):
        result = processor.process(_note("Test.md", "![[diagram.png|300]]"))
        assert result.content == "![diagram](/posts/diagram.png)"

    def test_asset_link(self, processor):
        result = processor.process(_note("Test.md", "Read [[paper.pdf]]"))
        assert result.content == "Read [paper.pdf](/posts/docs/paper.pdf)"

    def test_missing_link_untouched(self, processor):
        body = "See [[Nonexistent Note]] and ![[missing.png|alt]]."
        result = processor.process(_note("Test.md", body))

        assert result.content == body
        assert result.missing_links == ["Nonexistent Note", "missing.png"]

    def test_link_to_filtered_out_note_untouched(self):
        # "Note B" exists on disk but was not retained
        index = LinkIndex.from_directory(_directory([_note("Note A.md")]))
        processor = ContentProcessor(index, absolute_link("/posts"))

        result = processor.process(_note("Note A.md", "See [[Note B]]"))

        assert result.content == "See [[Note B]]"
        assert result.missing_links == ["Note B"]

    def test_path_link_to_filtered_out_note_untouched(self):
        # drafts/Note B.md was filtered out, a root "Note B" shares its name
        index = LinkIndex.from_directory(_directory([_note("A.md"), _note("Note B.md")]))
        processor = ContentProcessor(index, absolute_link("/posts"))

        result = processor.process(_note("A.md", "See [[drafts/Note B]] and [md](drafts/Note%20B.md)"))

        assert result.content == "See [[drafts/Note B]] and [md](drafts/Note%20B.md)"
        assert result.missing_links == ["drafts/Note B", "drafts/Note%20B.md"]

    def test_bare_name_still_resolves(self):
        index = LinkIndex.from_directory(_directory([_note("A.md"), _note("drafts/Note B.md")]))
        processor = ContentProcessor(index, absolute_link("/posts"))

        result = processor.process(_note("A.md", "See [[Note B]]"))

        assert result.content == "See [Note B](/posts/note-b)"

    def test_hugo_ref_transform(self, link_index):
        processor = ContentProcessor(link_index, hugo_ref("/posts"))
        result = processor.process(_note("Test.md", "Read [[First Note#Intro]]."))
        assert result.content == 'Read [First Note]({{< ref "posts/first-note.md#intro" >}}).'

    def test_relative_link_transform(self, link_index):
        processor = ContentProcessor(link_index, relative_link())
        result = processor.process(_note("Test.md", "Read [[First Note]]."))
        assert result.content == "Read [First Note](first-note.md)."


class TestMarkdownLinks:
    """Tests for rewriting markdown links into the vault."""

    def test_relative_note_link(self, processor):
        result = processor.process(_note("Test.md", "[see](First%20Note.md)"))
        assert result.content == "[see](/posts/first-note)"

    def test_link_with_anchor(self, processor):
        result = processor.process(_note("Test.md", "[deep](Folder/Deep%20Note.md#Part%20Two)"))
        assert result.content == "[deep](/posts/deep-note#part-two)"

    def test_link_relative_to_note_directory(self, processor):
        result = processor.process(_note("Folder/Deep Note.md", "[up](../First%20Note.md)"))
        assert result.content == "[up](/posts/first-note)"

    def test_markdown_image(self, processor):
        result = processor.process(_note("Test.md", "![img](diagram.png)"))
        assert result.content == "![img](/posts/diagram.png)"
        assert result.referenced_assets == ["diagram.png"]

    def test_external_links_untouched(self, processor):
        body = "[site](https://example.com) [mail](mailto:a@b.c) [top](#top) [abs](/posts/x)"
        result = processor.process(_note("Test.md", body))

        assert result.content == body
        assert result.missing_links == []

    def test_unresolved_markdown_link_untouched(self, processor):
        body = "Text with [regular](markdown) links and [[First Note]]."
        result = processor.process(_note("Test.md", body))

        assert "[regular](markdown)" in result.content
        assert "[First Note](/posts/first-note)" in result.content
        assert result.missing_links == ["markdown"]

    def test_rewritten_links_not_reprocessed(self, processor):
        result = processor.process(_note("Test.md", "[[First Note]]"))
        assert result.missing_links == []


class TestOutput:
    """Tests for frontmatter handling and output building."""

    def test_empty_content(self, processor):
        result = processor.process(_note("Test.md", ""))

        assert result.content == ""
        assert result.referenced_assets == []
        assert result.missing_links == []

    def test_frontmatter_copied_without_transform(self, processor):
        note = _note("Test.md", "Body", title="Kept")
        result = processor.process(note)

        assert result.front_matter == {"title": "Kept"}
        assert type(result.front_matter) is dict

    def test_frontmatter_transform(self, link_index):
        processor = ContentProcessor(
            link_index,
            absolute_link("/posts"),
            frontmatter_transform=hugo_frontmatter(datetime.timezone.utc, extra={"author": "Me"}),
        )
        result = processor.process(_note("my note.md", "Body", tags=["a"]))

        assert result.front_matter == {"title": "My Note", "tags": ["a"], "author": "Me"}

    def test_build_output_with_frontmatter(self, processor):
        processed = processor.process(_note("Test.md", "# Heading\n\nParagraph.", title="T", tags=["b", "a"]))
        output = processor.build_output(processed)

        assert output == "---\ntags:\n- b\n- a\ntitle: T\n---\n# Heading\n\nParagraph.\n"

    def test_build_output_empty_frontmatter(self, processor):
        processed = processor.process(_note("Test.md", "Just content"))
        assert processor.build_output(processed) == "Just content\n"

    def test_build_output_unicode(self, processor):
        processed = processor.process(_note("Test.md", "Body", title="Naïve"))
        assert "title: Naïve" in processor.build_output(processed)
