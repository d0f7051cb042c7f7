"""Tests for CLI commands."""

import json
from pathlib import Path

import httpx
import respx
import yaml

from weather_cache.cli import main

ARCHIVE_URL = "https://test-archive.example.com/v1/archive"


def _write_config(tmp_path: Path) -> Path:
    data = {
        "archive": {"base_url": "https://test-archive.example.com/v1"},
        "cache": {"directory": str(tmp_path / "cache")},
        "input": {"dates_file": str(tmp_path / "dates.txt")},
        "logging": {"level": "ERROR"},
    }
    path = tmp_path / "config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


class TestCLI:
    def test_no_command_returns_1(self, capsys):
        assert main([]) == 1

    def test_config_show(self, tmp_path: Path, capsys):
        config_path = tmp_path / "test.yaml"
        config_path.write_text("")
        result = main(["--config", str(config_path), "config", "show"])
        assert result == 0
        captured = capsys.readouterr()
        assert "archive-api.open-meteo.com" in captured.out

    def test_config_get(self, tmp_path: Path, capsys):
        config_path = _write_config(tmp_path)
        assert main(["--config", str(config_path), "config", "get", "archive.timezone"]) == 0
        assert capsys.readouterr().out.strip() == "auto"

    def test_config_get_unknown_key(self, tmp_path: Path, capsys):
        config_path = _write_config(tmp_path)
        assert main(["--config", str(config_path), "config", "get", "archive.daily.7"]) == 1
        assert "Config key not found" in capsys.readouterr().out

    def test_config_hash_stable(self, tmp_path: Path, capsys):
        config_path = _write_config(tmp_path)
        assert main(["--config", str(config_path), "config", "hash"]) == 0
        first = capsys.readouterr().out.strip()
        assert main(["--config", str(config_path), "config", "hash"]) == 0
        assert capsys.readouterr().out.strip() == first
        assert len(first) == 16

    def test_invalid_config(self, tmp_path: Path, capsys):
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("archive:\n  latitude: 500\n")
        assert main(["--config", str(config_path), "config", "show"]) == 1

    @respx.mock
    def test_fetch_json(self, tmp_path: Path, capsys, archive_body: str):
        config_path = _write_config(tmp_path)
        (tmp_path / "dates.txt").write_text("01/15/2024\n\n")
        respx.get(ARCHIVE_URL).mock(return_value=httpx.Response(200, text=archive_body))

        result = main(["--config", str(config_path), "fetch", "--format", "json"])
        assert result == 0
        out = json.loads(capsys.readouterr().out)
        assert out[0]["date"] == "2024-01-15"
        assert out[0]["maxTemperature"] == 12.0
        assert (tmp_path / "cache" / "2024-01-15.json").exists()

    def test_fetch_with_invalid_date_returns_1(self, tmp_path: Path, capsys):
        config_path = _write_config(tmp_path)
        dates = tmp_path / "other-dates.txt"
        dates.write_text("not-a-date\n")
        result = main(["--config", str(config_path), "fetch", "--dates", str(dates)])
        assert result == 1
        out = capsys.readouterr().out
        assert "Invalid date:" in out
        assert "Invalid: 1" in out

    def test_cache_list(self, tmp_path: Path, capsys, archive_body: str):
        config_path = _write_config(tmp_path)
        cache = tmp_path / "cache"
        cache.mkdir()
        (cache / "2024-01-15.json").write_text("{}")
        (cache / "2023-06-01.json").write_text("{}")
        assert main(["--config", str(config_path), "cache", "list"]) == 0
        assert capsys.readouterr().out.split() == ["2023-06-01", "2024-01-15"]

    @respx.mock
    def test_archive(self, tmp_path: Path, capsys, archive_body: str):
        config_path = _write_config(tmp_path)
        respx.get(ARCHIVE_URL).mock(return_value=httpx.Response(200, text=archive_body))
        result = main([
            "--config", str(config_path), "archive",
            "--start", "2024-01-15", "--end", "2024-01-15",
        ])
        assert result == 0
        out = json.loads(capsys.readouterr().out)
        assert out["statusCode"] == 200
        assert out["minTemperatureC"] == 5.0

    def test_archive_blank_start(self, tmp_path: Path, capsys):
        config_path = _write_config(tmp_path)
        result = main([
            "--config", str(config_path), "archive", "--start", " ", "--end", "2024-01-15",
        ])
        assert result == 1
        assert "start_date is required" in capsys.readouterr().out
