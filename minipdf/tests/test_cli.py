"""Tests for the minipdf command line."""

import pytest

from minipdf.cli import main
from minipdf.validator import PdfValidator


class TestDemoCommand:
    """Test ``minipdf demo``."""

    def test_writes_valid_file(self, tmp_path, capsys):
        output = tmp_path / "demo.pdf"
        assert main(["demo", str(output), "--title", "Shapes", "--pages", "2"]) == 0
        assert "2 page(s)" in capsys.readouterr().out

        data = output.read_bytes()
        assert data.startswith(b"%PDF-1.7\n")
        assert b"/Title (Shapes)" in data
        assert b"/Count 2" in data
        assert PdfValidator().validate(output).valid

    def test_page_size(self, tmp_path):
        output = tmp_path / "a5.pdf"
        assert main(["demo", str(output), "--width", "420", "--height", "595"]) == 0
        assert b"/MediaBox [ 0 0 420 595 ]" in output.read_bytes()

    def test_unwritable_output(self, tmp_path, capsys):
        assert main(["demo", str(tmp_path / "missing" / "demo.pdf")]) == 1
        assert "Error:" in capsys.readouterr().err


class TestValidateCommand:
    """Test ``minipdf validate``."""

    def test_validate(self, tmp_path, capsys):
        output = tmp_path / "demo.pdf"
        main(["demo", str(output)])
        capsys.readouterr()
        assert main(["validate", str(output), "-v"]) == 0
        out = capsys.readouterr().out
        assert "VALID" in out
        assert "Trailer:" in out

    def test_validate_broken(self, tmp_path):
        broken = tmp_path / "broken.pdf"
        broken.write_bytes(b"not a pdf")
        assert main(["validate", str(broken)]) == 1


def test_no_command(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_version(capsys):
    with pytest.raises(SystemExit):
        main(["--version"])
    assert "minipdf" in capsys.readouterr().out
