"""Tests for the filesystem note source and frontmatter codec."""

from notara.adapters.fs_notes import FsNotes
from notara.adapters.yaml_codec import YamlFrontmatter
from notara.core.model import NoteRef


def test_titles(tmp_path):
    """Titles come from frontmatter, then the first heading, then the stem."""
    (tmp_path / "a.md").write_text("---\ntitle: From Meta\n---\n# Ignored\n")
    (tmp_path / "b.md").write_text("intro\n# From Heading\nbody\n")
    (tmp_path / "c.md").write_text("no title here\n")

    refs = FsNotes(tmp_path).list_refs()

    assert refs == [
        NoteRef(id="a", title="From Meta"),
        NoteRef(id="b", title="From Heading"),
        NoteRef(id="c", title="c"),
    ]


def test_frontmatter_id(tmp_path):
    """A frontmatter id replaces the file stem."""
    (tmp_path / "some-file.md").write_text("---\nid: abc123\ntitle: T\n---\nbody\n")
    notes = FsNotes(tmp_path)

    assert notes.list_refs() == [NoteRef(id="abc123", title="T")]
    assert notes.get_body("abc123") == "body\n"
    assert notes.get_body("some-file") is None


def test_get_body_strips_frontmatter(tmp_path):
    """The body excludes the frontmatter block."""
    (tmp_path / "n.md").write_text("---\ntitle: N\n---\n# N\n\ntext\n")
    assert FsNotes(tmp_path).get_body("n") == "# N\n\ntext\n"


def test_missing_note(tmp_path):
    """Unknown ids give None."""
    assert FsNotes(tmp_path).get_body("nope") is None


def test_missing_root(tmp_path):
    """A notes directory that does not exist lists nothing."""
    assert FsNotes(tmp_path / "absent").list_refs() == []


def test_non_markdown_ignored(tmp_path):
    """Only .md files are notes."""
    (tmp_path / "x.txt").write_text("hi")
    (tmp_path / "y.md").write_text("hi")
    assert [r.id for r in FsNotes(tmp_path).list_refs()] == ["y"]


def test_invalid_yaml_kept_as_body():
    """Frontmatter that is not valid YAML is left in the body."""
    text = "---\nkey: [unclosed\n---\nbody\n"
    assert YamlFrontmatter().decode(text) == ({}, text)


def test_non_mapping_frontmatter():
    """A YAML list is not frontmatter."""
    text = "---\n- a\n- b\n---\nbody\n"
    assert YamlFrontmatter().decode(text) == ({}, text)


def test_no_frontmatter():
    """Text without a leading fence comes back unchanged."""
    assert YamlFrontmatter().decode("plain\n") == ({}, "plain\n")
