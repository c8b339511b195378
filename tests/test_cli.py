"""Tests for the dbdump command line."""

import pytest
from typer.testing import CliRunner

from conftest import rows
from dbdump import __version__
from dbdump.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("DBDUMP_DATABASE_URL", "DBDUMP_FORMAT", "DBDUMP_INCLUDE", "DBDUMP_EXCLUDE",
                "include", "exclude", "DBDUMP_LOG_LEVEL", "DBDUMP_LOG_FORMAT"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def target_url(target):
    return str(target.engine.url)


class TestCli:
    """Test CLI commands end to end against SQLite files."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_tables(self, source, db_url):
        result = runner.invoke(app, ["tables", "--url", db_url, "--exclude", "notes"])
        assert result.exit_code == 0, result.output
        assert "memberships" in result.output
        assert "users" in result.output
        assert "notes" not in result.output
        assert "schema_migrations" not in result.output

    def test_dump_and_load_file(self, source, db_url, target, target_url, tmp_path):
        path = tmp_path / "dump.yml"

        dumped = runner.invoke(app, ["dump", str(path), "--url", db_url])
        loaded = runner.invoke(app, ["load", str(path), "--url", target_url, "-v"])

        assert dumped.exit_code == 0, dumped.output
        assert loaded.exit_code == 0, loaded.output
        assert "Loaded 2 tables" in loaded.output
        assert rows(target, "SELECT id FROM users ORDER BY id") == [(1,), (2,), (3,)]

    def test_dump_data_only_to_directory(self, source, db_url, target, target_url, tmp_path):
        directory = tmp_path / "backup"

        dumped = runner.invoke(
            app, ["dump_data_only", f"{directory}/", "--url", db_url, "--format", "csv"]
        )
        loaded = runner.invoke(app, ["load", str(directory), "--url", target_url, "-f", "csv"])

        assert dumped.exit_code == 0, dumped.output
        assert sorted(p.name for p in directory.iterdir()) == [
            "memberships.csv",
            "notes.csv",
            "users.csv",
        ]
        assert loaded.exit_code == 0, loaded.output
        assert target.row_count("memberships") == 3

    def test_dump_with_dir_flag(self, source, db_url, tmp_path):
        directory = tmp_path / "out"
        result = runner.invoke(app, ["dump", str(directory), "--dir", "--url", db_url])
        assert result.exit_code == 0, result.output
        assert (directory / "users.yml").exists()

    def test_url_from_environment(self, source, db_url, monkeypatch):
        monkeypatch.setenv("DBDUMP_DATABASE_URL", db_url)
        result = runner.invoke(app, ["tables"])
        assert result.exit_code == 0, result.output
        assert "users" in result.output

    def test_settings_file(self, source, db_url, tmp_path, monkeypatch):
        monkeypatch.setenv("TEST_DB_URL", db_url)
        settings = tmp_path / "dbdump.yml"
        settings.write_text("database_url: ${TEST_DB_URL}\ninclude: [users]\n", encoding="utf-8")

        result = runner.invoke(app, ["tables", "--config", str(settings)])

        assert result.exit_code == 0, result.output
        assert result.output.split() == ["users"]

    def test_missing_url(self, tmp_path):
        result = runner.invoke(app, ["dump", str(tmp_path / "dump.yml")])
        assert result.exit_code == 1
        assert "No database URL" in result.output

    def test_unknown_format(self, source, db_url, tmp_path):
        result = runner.invoke(app, ["dump", str(tmp_path / "x"), "--url", db_url, "-f", "xml"])
        assert result.exit_code == 1
        assert "format must be one of" in result.output

    def test_malformed_input(self, source, db_url, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("---\nusers: [unclosed\n", encoding="utf-8")

        result = runner.invoke(app, ["load", str(path), "--url", db_url])

        assert result.exit_code == 1
        assert "Invalid YAML" in result.output
        assert source.row_count("users") == 3
