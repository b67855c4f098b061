"""
Integration tests for the brevit command-line interface.
"""

import json

import pytest
import yaml
from typer.testing import CliRunner

from brevit import __version__
from brevit.cli import app

runner = CliRunner()


@pytest.mark.integration
class TestOptimizeCommand:
    """Tests for `brevit optimize`."""

    def test_stdin_json(self):
        result = runner.invoke(app, ["optimize"], input='{"user": {"name": "J"}}')

        assert result.exit_code == 0
        assert result.stdout == "user.name:J\n"

    def test_file_input(self, tmp_path, order_data):
        path = tmp_path / "order.json"
        path.write_text(json.dumps(order_data))

        result = runner.invoke(app, ["optimize", str(path), "--abbreviate"])

        assert result.exit_code == 0
        assert result.stdout.startswith("@o=order\n@o.id:o-456\n")

    def test_json_mode_option(self):
        result = runner.invoke(app, ["optimize", "--json-mode", "none"], input='{"a": 1}')

        assert result.exit_code == 0
        assert result.stdout == '{"a": 1}\n'

    def test_binary_input(self, tmp_path, png_bytes):
        path = tmp_path / "image.png"
        path.write_bytes(png_bytes)

        result = runner.invoke(app, ["optimize", str(path), "--image-mode", "metadata"])

        assert result.exit_code == 0
        assert result.stdout == "[Image: PNG, 32 bytes]\n"

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["optimize", str(tmp_path / "missing.json")])
        assert result.exit_code == 1

    def test_invalid_threshold(self):
        result = runner.invoke(app, ["optimize", "--threshold", "0"], input="{}")
        assert result.exit_code == 1

    def test_invalid_mode(self):
        result = runner.invoke(app, ["optimize", "--json-mode", "xml"], input="{}")
        assert result.exit_code != 0


@pytest.mark.integration
class TestBrevityCommand:
    """Tests for `brevit brevity`."""

    def test_tabular(self):
        data = json.dumps({"items": [{"id": 1, "name": "A"}, {"id": 2, "name": "B"}]})
        result = runner.invoke(app, ["brevity"], input=data)

        assert result.exit_code == 0
        assert result.stdout == "items[2]{id,name}:\n1,A\n2,B\n"

    def test_long_text(self):
        result = runner.invoke(
            app,
            ["brevity", "--long-text-threshold", "5", "--text-mode", "clean"],
            input="too    many   spaces",
        )

        assert result.exit_code == 0
        assert result.stdout == "too many spaces\n"

    def test_explain(self):
        result = runner.invoke(app, ["brevity", "--explain"], input='{"t": [1, 2]}')

        assert result.exit_code == 0
        assert "t[2]:1,2" in result.stdout


@pytest.mark.integration
class TestAnalyzeCommand:
    """Tests for `brevit analyze`."""

    def test_analyze_table(self, order_data):
        result = runner.invoke(app, ["analyze"], input=json.dumps(order_data))

        assert result.exit_code == 0
        assert "Structural Analysis" in result.stdout
        assert "Strategy Candidates" in result.stdout
        assert "Flatten" in result.stdout


@pytest.mark.integration
class TestMiscCommands:
    """Tests for version and config commands."""

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_config_show(self):
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "long_text_threshold" in result.stdout

    def test_config_export_and_load(self, tmp_path):
        output = tmp_path / "exported.yaml"

        result = runner.invoke(app, ["config", "export", "--output", str(output)])
        assert result.exit_code == 0
        assert yaml.safe_load(output.read_text())["json_mode"] == "flatten"

        result = runner.invoke(app, ["config", "load", str(output)])
        assert result.exit_code == 0
        assert "Configuration loaded" in result.stdout

    def test_config_load_invalid(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("long_text_threshold: -1\n")

        result = runner.invoke(app, ["config", "load", str(path)])
        assert result.exit_code == 1

    def test_config_diff(self, tmp_path):
        first = tmp_path / "a.yaml"
        second = tmp_path / "b.yaml"
        first.write_text("long_text_threshold: 100\n")
        second.write_text("long_text_threshold: 200\n")

        result = runner.invoke(app, ["config", "diff", str(first), str(second)])

        assert result.exit_code == 0
        assert "long_text_threshold" in result.stdout


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
