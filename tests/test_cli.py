import json

from click.testing import CliRunner

import devhost.cli as cli_module


def test_cli_uses_config_and_allows_cli_override(tmp_path, monkeypatch):
    config_file = tmp_path / ".devhost.yml"
    config_file.write_text("max_depth: 5\ndry_run: false\n", encoding="utf-8")

    captured = {}

    class FakeDevHost:
        def __init__(self, **kwargs):
            captured.update(kwargs)

        def run(self):
            return 0

    monkeypatch.setattr(cli_module, "DevHost", FakeDevHost)

    result = CliRunner().invoke(cli_module.main, ["--config", str(config_file), "--dry-run"])

    assert result.exit_code == 0
    assert captured["config"]["max_depth"] == 5
    assert captured["dry_run"] is True


def test_cli_uses_default_config_file_when_present(tmp_path, monkeypatch):
    (tmp_path / ".devhost.yml").write_text("dry_run: true\n", encoding="utf-8")

    captured = {}

    class FakeDevHost:
        def __init__(self, **kwargs):
            captured.update(kwargs)

        def run(self):
            return 0

    monkeypatch.setattr(cli_module, "DevHost", FakeDevHost)
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli_module.main, [])

    assert result.exit_code == 0
    assert captured["dry_run"] is True


def test_cli_propagates_failure_exit_code(monkeypatch):
    class FailingDevHost:
        def __init__(self, **_kwargs):
            pass

        def run(self):
            return 1

    monkeypatch.setattr(cli_module, "DevHost", FailingDevHost)

    result = CliRunner().invoke(cli_module.main, [])

    assert result.exit_code == 1


def test_cli_rejects_invalid_config(tmp_path):
    config_file = tmp_path / "bad.yml"
    config_file.write_text("nope: 1\n", encoding="utf-8")

    result = CliRunner().invoke(cli_module.main, ["--config", str(config_file)])

    assert result.exit_code == 1
    assert "Unknown configuration keys" in result.output


def test_mains_prints_entry_points(tmp_path, monkeypatch):
    package_dir = tmp_path / "node_modules" / "left-pad"
    package_dir.mkdir(parents=True)
    (package_dir / "package.json").write_text(
        json.dumps({"name": "left-pad", "main": "index.js"}), encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli_module.mains, [])

    assert result.exit_code == 0
    assert result.output == "left-pad: index.js\n"


def test_mains_missing_directory_fails(tmp_path):
    result = CliRunner().invoke(cli_module.mains, ["--path", str(tmp_path / "missing")])

    assert result.exit_code == 1
    assert "Packages directory not found" in result.output
