"""Tests for the command-line interface."""

from click.testing import CliRunner
from rich.console import Console

from paxmanifest import __version__
from paxmanifest.cli import main
from paxmanifest.cli.render import build_manifest_table
from paxmanifest.core.schema import RecordStatus
from paxmanifest.io.export import EXPORT_HEADERS

from conftest import make_record


class TestDeriveCommand:
    """Tests for the derive command."""

    def test_child(self):
        """A two-year-old boy is a CHILD titled MR."""
        result = CliRunner().invoke(main, ["derive", "01/01/2023", "--gender", "MALE", "--today", "2025-06-01"])
        assert result.exit_code == 0
        assert "Type: CHILD" in result.output
        assert "Title: MR" in result.output

    def test_unparseable(self):
        """Unparseable dates print ADULT with no title."""
        result = CliRunner().invoke(main, ["derive", "abc"])
        assert result.exit_code == 0
        assert "Type: ADULT" in result.output
        assert "Title: -" in result.output

    def test_bad_today(self):
        """Malformed reference dates exit non-zero."""
        result = CliRunner().invoke(main, ["derive", "01/01/2000", "--today", "yesterday"])
        assert result.exit_code == 1


class TestOtherCommands:
    """Tests for headers and version."""

    def test_headers(self):
        """Headers are printed in export order."""
        result = CliRunner().invoke(main, ["headers"])
        assert result.exit_code == 0
        assert result.output.splitlines() == list(EXPORT_HEADERS)

    def test_version(self):
        """The version flag prints the package version."""
        result = CliRunner().invoke(main, ["--version"])
        assert __version__ in result.output

    def test_scan_without_key(self, tmp_path, monkeypatch):
        """Scanning without an API key fails cleanly."""
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.delenv("API_KEY", raising=False)
        monkeypatch.chdir(tmp_path)
        image = tmp_path / "scan.jpg"
        image.write_bytes(b"x")

        result = CliRunner().invoke(main, ["scan", str(image)])
        assert result.exit_code == 1
        assert "API key" in result.output


class TestRender:
    """Tests for the rich manifest table."""

    def test_table_columns_and_rows(self):
        """The table has the export columns plus status."""
        records = [
            make_record("px_1", last_name="LOPEZ"),
            make_record("px_2", status=RecordStatus.ERROR, error_message="Unreadable"),
        ]
        table = build_manifest_table(records)
        assert [c.header for c in table.columns] == list(EXPORT_HEADERS) + ["STATUS"]
        assert table.row_count == 2

    def test_renders_error_message(self):
        """Error messages appear in the status column."""
        console = Console(record=True, width=300)
        console.print(build_manifest_table([make_record("px_2", status=RecordStatus.ERROR, error_message="Unreadable")]))
        assert "Unreadable" in console.export_text()

    def test_error_message_markup_is_literal(self):
        """Brackets in error messages print as text, not rich markup."""
        console = Console(record=True, width=300)
        record = make_record("px_3", status=RecordStatus.ERROR, error_message="Bad scan [/x] [red]")
        console.print(build_manifest_table([record]))
        assert "Bad scan [/x] [red]" in console.export_text()
