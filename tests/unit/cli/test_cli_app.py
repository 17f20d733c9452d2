"""
Тесты CLI inventory-search — search, suggest, voice, history, patterns, config.

Используем Typer CliRunner для тестирования команд без реального терминала.
Хранилище переключается на JSON-файл во временной директории.
"""

import json

import pytest
from typer.testing import CliRunner

from inventory_search import __version__
from inventory_search.cli.app import app

runner = CliRunner()


@pytest.fixture
def items_file(tmp_path, parts):
    path = tmp_path / "parts.json"
    path.write_text(json.dumps(parts), encoding="utf-8")
    return str(path)


@pytest.fixture(autouse=True)
def json_storage(isolated_config, monkeypatch, tmp_path):
    """Файловое хранилище вместо SQLite в рабочей директории."""
    monkeypatch.setenv("INVENTORY_STORAGE_BACKEND", "json")
    monkeypatch.setenv("INVENTORY_STORAGE_PATH", str(tmp_path / "store.json"))


def invoke_json(*args):
    result = runner.invoke(app, ["--json", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestCliApp:
    """Тесты основного CLI приложения."""

    def test_version_option(self):
        """--version показывает версию."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_help_option(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "search" in result.stdout

    def test_unknown_command(self):
        result = runner.invoke(app, ["unknown-command"])
        assert result.exit_code != 0


class TestSearchCommand:
    """Тесты команды search."""

    def test_ranked_json(self, items_file):
        data = invoke_json("-i", items_file, "search", "filter")

        assert data["query"] == "filter"
        assert data["count"] == 2
        assert data["total"] == 5
        assert [r["item"]["partNumber"] for r in data["results"]] == ["OF-100", "AF-200"]
        assert data["results"][0]["rank"] == 1
        assert data["results"][0]["score"] == 60
        assert data["results"][0]["matched_fields"] == ["description", "category"]

    def test_filters(self, items_file):
        data = invoke_json(
            "-i", items_file, "search", "filter", "-f", "category=Filters", "-f", "shelf=A2"
        )
        assert [r["item"]["partNumber"] for r in data["results"]] == ["AF-200"]

    def test_numeric_filter_value(self, items_file):
        data = invoke_json("-i", items_file, "search", "", "-f", "quantity=0")
        assert [r["item"]["partNumber"] for r in data["results"]] == ["BR-400"]

    def test_sort_desc(self, items_file):
        data = invoke_json(
            "-i", items_file, "search", "filter", "--sort", "quantity", "--desc"
        )
        assert [r["item"]["quantity"] for r in data["results"]] == [12, 4]

    def test_limit(self, items_file):
        data = invoke_json("-i", items_file, "search", "", "-n", "2")
        assert len(data["results"]) == 2
        assert data["count"] == 5

    def test_query_saved_to_history(self, items_file):
        invoke_json("-i", items_file, "search", "belt")
        history = invoke_json("history", "show")

        assert [(e["term"], e["count"]) for e in history] == [("belt", 1)]

    def test_no_save(self, items_file):
        invoke_json("-i", items_file, "search", "belt", "--no-save")
        assert invoke_json("history", "show") == []

    def test_rich_table(self, items_file):
        result = runner.invoke(app, ["-i", items_file, "search", "belt"])

        assert result.exit_code == 0
        assert "VB-300" in result.stdout
        assert "Найдено: 1" in result.stdout

    def test_nothing_found(self, items_file):
        result = runner.invoke(app, ["-i", items_file, "search", "zzz"])

        assert result.exit_code == 0
        assert "Ничего не найдено" in result.stdout

    def test_bad_filter(self, items_file):
        result = runner.invoke(app, ["-i", items_file, "search", "oil", "-f", "category"])
        assert result.exit_code == 2

    def test_invalid_items_file(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text('{"parts": []}', encoding="utf-8")

        result = runner.invoke(app, ["-i", str(path), "search", "oil"])

        assert result.exit_code == 1
        assert "Не удалось загрузить коллекцию" in result.stdout

    def test_items_wrapped_in_object(self, tmp_path, parts):
        path = tmp_path / "wrapped.json"
        path.write_text(json.dumps({"items": parts}), encoding="utf-8")

        data = invoke_json("-i", str(path), "search", "gloves")
        assert data["count"] == 1


class TestSuggestCommand:
    """Тесты команды suggest."""

    def test_suggestions_json(self, items_file):
        data = invoke_json("-i", items_file, "suggest", "filter")

        assert data[0] == {"type": "category", "text": "Filters", "count": 2}
        assert {"type": "item", "text": "oil filter", "count": None} in data

    def test_empty_query_shows_history(self, items_file):
        invoke_json("-i", items_file, "search", "belt")
        data = invoke_json("-i", items_file, "suggest")

        assert data == [{"type": "history", "text": "belt", "count": 1}]

    def test_no_suggestions(self, items_file):
        result = runner.invoke(app, ["-i", items_file, "suggest", "zzz"])
        assert result.exit_code == 0
        assert "Нет подсказок" in result.stdout


class TestVoiceCommand:
    """Тесты команды voice."""

    def test_prefix_stripped(self, items_file):
        data = invoke_json("-i", items_file, "voice", "Hey inventory, find belts")

        assert data["query"] == "belts"
        assert data["results"][0]["item"]["partNumber"] == "VB-300"

    def test_empty_transcript(self, items_file):
        result = runner.invoke(app, ["-i", items_file, "voice", "show me"])
        assert result.exit_code == 1


class TestHistoryCommand:
    """Тесты команды history."""

    def test_empty(self):
        result = runner.invoke(app, ["history", "show"])
        assert result.exit_code == 0
        assert "История поиска пуста" in result.stdout

    def test_clear_with_yes(self, items_file):
        invoke_json("-i", items_file, "search", "belt")

        result = runner.invoke(app, ["history", "clear", "--yes"])

        assert result.exit_code == 0
        assert invoke_json("history", "show") == []

    def test_clear_declined(self, items_file):
        invoke_json("-i", items_file, "search", "belt")

        result = runner.invoke(app, ["history", "clear"], input="n\n")

        assert result.exit_code == 1
        assert len(invoke_json("history", "show")) == 1


class TestPatternsCommand:
    """Тесты команды patterns."""

    def test_record_and_show(self):
        result = runner.invoke(app, ["patterns", "record", "Oil", "OF-100"])
        assert result.exit_code == 0

        data = invoke_json("patterns", "show")
        assert data == {"oil": {"items": {"OF-100": 1}, "totalCount": 1}}

    def test_record_blank_query(self):
        result = runner.invoke(app, ["patterns", "record", " ", "OF-100"])
        assert result.exit_code == 1

    def test_recorded_pattern_boosts_search(self, items_file):
        runner.invoke(app, ["patterns", "record", "filter", "AF-200"])
        data = invoke_json("-i", items_file, "search", "filter")

        assert data["results"][0]["item"]["partNumber"] == "AF-200"
        assert data["results"][0]["score"] == 65

    def test_show_empty(self):
        result = runner.invoke(app, ["patterns", "show"])
        assert result.exit_code == 0
        assert "Usage patterns пока нет" in result.stdout


class TestConfigCommand:
    """Тесты команды config."""

    def test_show_json(self):
        data = invoke_json("config", "show")

        assert data["source"] is None
        assert data["config"]["storage"]["backend"] == "json"
        assert data["config"]["search"]["fields"] == [
            "partNumber",
            "description",
            "category",
            "shelf",
        ]

    def test_show_table(self):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "cache.ttl" in result.stdout
