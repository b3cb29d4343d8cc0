"""tests for HTML fragment exporters."""

import io
from pathlib import Path

from groupcontent.core.models import GroupContent
from groupcontent.exporters.html import (
    HTMLFileExporter,
    StreamExporter,
    fragment_filename,
)

HTML = '<div class="group-content">x</div>'


def _entity(entity_id: str = "42") -> GroupContent:
    return GroupContent(id=entity_id, label="Test", bundle="article", group_id="1")


def test_fragment_filename_sanitizes_id() -> None:
    """ids are made filename-safe."""
    assert fragment_filename(_entity("42")) == "group-content-42.html"
    assert fragment_filename(_entity("a/b c")) == "group-content-a_b_c.html"
    assert fragment_filename(_entity("//")) == "group-content-unknown.html"


def test_file_exporter_writes_fragment(tmp_path: Path) -> None:
    """Test basic fragment export."""
    output_dir = tmp_path / "out"

    HTMLFileExporter().export(_entity(), HTML, str(output_dir))

    output_file = output_dir / "group-content-42.html"
    assert output_file.read_text(encoding="utf-8") == HTML + "\n"


def test_file_exporter_dry_run(tmp_path: Path) -> None:
    """Test dry run mode doesn't write files."""
    output_dir = tmp_path / "out"

    HTMLFileExporter().export(_entity(), HTML, str(output_dir), dry_run=True)

    assert not (output_dir / "group-content-42.html").exists()


def test_file_exporter_no_overwrite(tmp_path: Path) -> None:
    """Test that existing files are not overwritten when overwrite=False."""
    output_file = tmp_path / "group-content-42.html"
    output_file.write_text("ORIGINAL CONTENT", encoding="utf-8")

    HTMLFileExporter().export(_entity(), HTML, str(tmp_path), overwrite=False)

    assert output_file.read_text(encoding="utf-8") == "ORIGINAL CONTENT"


def test_file_exporter_overwrite(tmp_path: Path) -> None:
    """Test that overwrite=True replaces existing files."""
    output_file = tmp_path / "group-content-42.html"
    output_file.write_text("ORIGINAL CONTENT", encoding="utf-8")

    HTMLFileExporter().export(_entity(), HTML, str(tmp_path), overwrite=True)

    assert output_file.read_text(encoding="utf-8") == HTML + "\n"


def test_stream_exporter_writes_fragments() -> None:
    """fragments are written one after another."""
    stream = io.StringIO()
    exporter = StreamExporter(stream)

    exporter.export(_entity("1"), "<div>1</div>")
    exporter.export(_entity("2"), "<div>2</div>")

    assert stream.getvalue() == "<div>1</div>\n<div>2</div>\n"


def test_stream_exporter_dry_run() -> None:
    """dry run writes nothing to the stream."""
    stream = io.StringIO()

    StreamExporter(stream).export(_entity(), HTML, dry_run=True)

    assert stream.getvalue() == ""
