"""Тесты голосового поиска (inventory_search.core.voice)."""

from unittest.mock import MagicMock

import pytest

from inventory_search.core.voice import VoiceSearchController, strip_command_prefixes
from inventory_search.interfaces.voice import BaseVoiceRecognizer


class FakeRecognizer(BaseVoiceRecognizer):
    """Распознаватель, которому транскрипт передаёт сам тест."""

    def __init__(self, supported=True):
        self.supported = supported
        self.callback = None
        self.stopped = False

    @property
    def is_supported(self):
        return self.supported

    def start(self, on_transcript):
        self.callback = on_transcript

    def stop(self):
        self.stopped = True

    def say(self, text):
        self.callback(text)


class TestStripCommandPrefixes:
    """Нормализация транскрипта."""

    @pytest.mark.parametrize(
        "transcript, query",
        [
            ("find oil filter", "oil filter"),
            ("Search for V-Belt", "v-belt"),
            ("show me bearings", "bearings"),
            ("look for gloves", "gloves"),
            ("Hey inventory, find oil filter", "oil filter"),
            ("inventory belts", "belts"),
            ("  OIL FILTER  ", "oil filter"),
        ],
    )
    def test_prefixes_removed(self, transcript, query):
        assert strip_command_prefixes(transcript) == query

    def test_prefix_only_gives_empty(self):
        assert strip_command_prefixes("Find") == ""

    def test_whole_word_only(self):
        """Префикс внутри слова не снимается."""
        assert strip_command_prefixes("finder tool") == "finder tool"

    def test_prefix_in_middle_kept(self):
        assert strip_command_prefixes("oil filter find") == "oil filter find"


class TestVoiceSearchController:
    """Активация распознавания."""

    def test_transcript_becomes_query(self):
        recognizer = FakeRecognizer()
        on_query = MagicMock()
        controller = VoiceSearchController(recognizer, on_query)

        assert controller.start() is True
        assert controller.is_active
        recognizer.say("Find air filter")

        on_query.assert_called_once_with("air filter")
        assert not controller.is_active
        assert controller.last_transcript == "Find air filter"

    def test_one_transcript_per_activation(self):
        recognizer = FakeRecognizer()
        on_query = MagicMock()
        controller = VoiceSearchController(recognizer, on_query)

        controller.start()
        recognizer.say("oil")
        recognizer.say("belt")

        on_query.assert_called_once_with("oil")

    def test_empty_query_not_forwarded(self):
        recognizer = FakeRecognizer()
        on_query = MagicMock()
        controller = VoiceSearchController(recognizer, on_query)

        controller.start()
        recognizer.say("show me")

        on_query.assert_not_called()

    def test_unsupported(self):
        controller = VoiceSearchController(FakeRecognizer(supported=False), MagicMock())

        assert not controller.is_supported
        assert controller.start() is False
        assert not controller.is_active

    def test_stop(self):
        recognizer = FakeRecognizer()
        on_query = MagicMock()
        controller = VoiceSearchController(recognizer, on_query)

        controller.start()
        controller.stop()
        recognizer.say("oil")

        assert recognizer.stopped
        on_query.assert_not_called()
