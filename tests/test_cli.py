"""
Tests for the louvor command line.
"""

import json

import pytest

from louvor.main import main


@pytest.fixture
def sheet(tmp_path):
    path = tmp_path / "cifra.txt"
    path.write_text("C G Am F\nDeus é fiel\nC G", encoding="utf-8")
    return path


@pytest.fixture
def config_dir(tmp_path):
    return tmp_path / "config"


class TestTransposeCommand:
    """Tests for `louvor transpose`."""

    def test_transpose_semitones(self, sheet, config_dir, capsys):
        """Test transposing by a semitone count."""
        code = main(["--config-dir", str(config_dir), "transpose", str(sheet), "-s", "2"])

        assert code == 0
        assert capsys.readouterr().out == "D A Bm G\nDeus é fiel\nD A"

    def test_transpose_keys(self, sheet, config_dir, capsys):
        """Test transposing from one key to another."""
        code = main(["--config-dir", str(config_dir), "transpose", str(sheet),
                     "--from", "C", "--to", "D"])

        assert code == 0
        assert capsys.readouterr().out.startswith("D A Bm G")

    def test_transpose_to_file(self, sheet, config_dir, tmp_path):
        """Test writing the result to a file."""
        output = tmp_path / "out.txt"
        code = main(["--config-dir", str(config_dir), "transpose", str(sheet),
                     "-s", "-1", "-o", str(output)])

        assert code == 0
        assert output.read_text(encoding="utf-8") == "B Gb Abm E\nDeus é fiel\nB Gb"

    def test_recent_file_recorded(self, sheet, config_dir):
        """Test the transposed sheet is added to recent files."""
        main(["--config-dir", str(config_dir), "transpose", str(sheet), "-s", "1"])

        data = json.loads((config_dir / "config.json").read_text(encoding="utf-8"))
        assert data["recent_files"] == [str(sheet.resolve())]

    def test_unwritable_config_still_succeeds(self, sheet, tmp_path, capsys):
        """Test a failed recent-files save does not fail the transposition."""
        blocked = tmp_path / "blocked"
        blocked.write_text("not a directory", encoding="utf-8")

        code = main(["--config-dir", str(blocked), "transpose", str(sheet), "-s", "2"])

        assert code == 0
        assert capsys.readouterr().out == "D A Bm G\nDeus é fiel\nD A"

    def test_chord_lines_only_flag(self, tmp_path, config_dir, capsys):
        """Test inline chords on lyric lines follow the chord lines."""
        path = tmp_path / "inline.txt"
        path.write_text("C   G\nDeus é fiel [G]", encoding="utf-8")

        code = main(["--config-dir", str(config_dir), "transpose", str(path),
                     "-s", "2", "--chord-lines-only"])

        assert code == 0
        assert capsys.readouterr().out == "D   A\nDeus é fiel [A]"

    def test_missing_shift(self, sheet, config_dir, capsys):
        """Test an error is reported without a shift."""
        code = main(["--config-dir", str(config_dir), "transpose", str(sheet)])

        assert code == 2
        assert "Error" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, config_dir, capsys):
        """Test a missing chord sheet is reported."""
        code = main(["--config-dir", str(config_dir), "transpose",
                     str(tmp_path / "nope.txt"), "-s", "1"])

        assert code == 1
        assert "Error" in capsys.readouterr().err


class TestOtherCommands:
    """Tests for the remaining subcommands."""

    def test_chords(self, sheet, config_dir, capsys):
        """Test listing distinct chords."""
        code = main(["--config-dir", str(config_dir), "chords", str(sheet)])

        assert code == 0
        assert capsys.readouterr().out.strip() == "C G Am F"

    def test_interval(self, config_dir, capsys):
        """Test measuring an interval."""
        main(["--config-dir", str(config_dir), "interval", "C", "G"])
        assert capsys.readouterr().out.strip() == "7"

    def test_keys(self, config_dir, capsys):
        """Test listing transposition choices."""
        main(["--config-dir", str(config_dir), "keys"])

        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 25
        assert any("Original" in line for line in lines)

    def test_ask(self, config_dir, capsys):
        """Test asking the assistant."""
        code = main(["--config-dir", str(config_dir), "ask",
                     "Quem", "são", "os", "pastores", "da", "igreja?"])

        assert code == 0
        out = capsys.readouterr().out
        assert "Agente de História" in out
        assert "Pastor Gadiel Lima" in out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
