"""Подсветка слов запроса в тексте.

Функции:
    highlight_spans
        Непересекающиеся интервалы совпадений в исходном тексте.
    highlight_text
        Оборачивает интервалы маркерами.

Все слова ищутся в ИСХОДНОМ тексте, пересекающиеся и смежные интервалы
сливаются, каждый участок оборачивается ровно один раз. Поэтому второе
слово не может совпасть с разметкой, вставленной для первого.
"""

import re
from collections.abc import Iterable

DEFAULT_HIGHLIGHT_CLASS = "bg-yellow-200 text-gray-900 px-1 rounded"


def highlight_spans(text: str, words: Iterable[str]) -> list[tuple[int, int]]:
    """Находит участки текста, совпадающие с любым из слов.

    Args:
        text: Исходный текст.
        words: Слова запроса (регистр не важен).

    Returns:
        Отсортированные непересекающиеся интервалы [start, end).
    """
    spans: list[tuple[int, int]] = []
    for word in words:
        if not word:
            continue
        pattern = re.compile(re.escape(word), re.IGNORECASE)
        spans.extend(m.span() for m in pattern.finditer(text))

    if not spans:
        return []

    spans.sort()
    merged = [spans[0]]
    for start, end in spans[1:]:
        last_start, last_end = merged[-1]
        if start <= last_end:
            merged[-1] = (last_start, max(last_end, end))
        else:
            merged.append((start, end))
    return merged


def highlight_text(
    text: str,
    words: Iterable[str],
    open_marker: str = f'<span class="{DEFAULT_HIGHLIGHT_CLASS}">',
    close_marker: str = "</span>",
) -> str:
    """Оборачивает совпадения маркерами.

    Args:
        text: Исходный текст.
        words: Слова запроса.
        open_marker: Открывающий маркер.
        close_marker: Закрывающий маркер.

    Returns:
        Текст с маркерами (исходный текст если совпадений нет).
    """
    if not text:
        return text

    spans = highlight_spans(text, words)
    if not spans:
        return text

    parts: list[str] = []
    cursor = 0
    for start, end in spans:
        parts.append(text[cursor:start])
        parts.append(f"{open_marker}{text[start:end]}{close_marker}")
        cursor = end
    parts.append(text[cursor:])
    return "".join(parts)


__all__ = ["DEFAULT_HIGHLIGHT_CLASS", "highlight_spans", "highlight_text"]
