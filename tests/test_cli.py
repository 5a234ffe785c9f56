"""Tests for the batch command line runner."""

import io
import logging
from pathlib import Path

from shellvars.cli import main, run_line
from shellvars.variables import Variables


class TestRunLine:
    """Tests for running single lines."""

    def test_let_assigns(self):
        """Test that a let line assigns and prints nothing."""
        variables = Variables()
        assert run_line("let a = 1", variables) is None
        assert variables.string("a") == "1"

    def test_words_are_expanded(self):
        """Test that other lines print their expanded words."""
        variables = Variables()
        variables.assign("l = [x y]")
        assert run_line("echo @l $len(@l)", variables) == "echo x y 2"

    def test_comments_and_blank_lines(self):
        """Test that comments and blank lines produce nothing."""
        variables = Variables()
        assert run_line("# let a = 1", variables) is None
        assert run_line("   ", variables) is None
        assert not variables.is_defined("a")


class TestMain:
    """Tests for the main entry point."""

    def test_commands(self, capsys):
        """Test that -c lines run in order."""
        result = main(["-c", "let a = 1", "-c", "value $a"])
        assert result == 0
        assert capsys.readouterr().out == "value 1\n"

    def test_method_call(self, capsys):
        """Test that a method call prints as one word."""
        main(["-c", "let l = [x y z]", "-c", "$join(@l ',')"])
        assert capsys.readouterr().out == "x,y,z\n"

    def test_file(self, tmp_path: Path, capsys):
        """Test that lines are read from a file."""
        script = tmp_path / "vars.txt"
        script.write_text("""
# Typed assignments
let n:int = 4
let n *= 3
$n

let name = world
hello $to_uppercase(name)
""")

        result = main(["-f", str(script)])
        assert result == 0
        assert capsys.readouterr().out == "12\nhello WORLD\n"

    def test_missing_file(self, tmp_path: Path, capsys):
        """Test that a missing file is reported."""
        result = main(["-f", str(tmp_path / "missing.txt")])
        assert result == 1
        assert "Error: File not found" in capsys.readouterr().err

    def test_stdin(self, monkeypatch, capsys):
        """Test that lines are read from stdin when no other input is given."""
        monkeypatch.setattr("sys.stdin", io.StringIO("let a = 2\n$a\n"))
        assert main([]) == 0
        assert capsys.readouterr().out == "2\n"

    def test_bad_assignment_is_warned(self, caplog, capsys):
        """Test that a rejected assignment is logged and does not stop the run."""
        with caplog.at_level(logging.WARNING):
            result = main(["-c", "let x:int = abc", "-c", "after"])
        assert result == 0
        assert "expected int" in caplog.text
        assert capsys.readouterr().out == "after\n"
