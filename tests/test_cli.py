"""
test_cli.py — Tests for the fuel-convert command line
"""

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fuel.cli import main


class TestMain:

    def test_default_precision(self, capsys):
        assert main(["123"]) == 0
        assert capsys.readouterr().out == "1.912\n"

    def test_explicit_precision(self, capsys):
        assert main(["1", "0"]) == 0
        assert capsys.readouterr().out == "378\n"

    def test_approximate(self, capsys):
        assert main(["--approximate", "1"]) == 0
        assert capsys.readouterr().out == "235.21458333333333333333\n"

    def test_verbose(self, capsys):
        assert main(["-v", "123"]) == 0
        assert capsys.readouterr().out == "1.912\n"

    def test_malformed_value(self, capsys):
        assert main(["abc"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("Error: ")

    def test_zero_value(self, capsys):
        assert main(["0"]) == 1
        assert "Error: " in capsys.readouterr().err

    def test_negative_precision(self, capsys):
        assert main(["5", "-1"]) == 1
        assert "precision" in capsys.readouterr().err

    def test_non_integer_precision_exits(self):
        with pytest.raises(SystemExit) as excinfo:
            main(["5", "x"])
        assert excinfo.value.code == 2

    def test_missing_value_exits(self):
        with pytest.raises(SystemExit):
            main([])
