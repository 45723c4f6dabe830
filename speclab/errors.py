# speclab/errors.py
"""
speclab.errors
==============

Канонические исключения speclab.

* SpecLabError            – общий базовый тип;
* RecordStructureError    – коллекция записей «не той формы» (нет поля dep и т.п.);
* HeaderError             – неизвестное поле заголовка / недопустимое значение /
                            рассогласованный заголовок;
* NonSpectralRecordError  – в батче есть запись, не являющаяся спектральной.

Все ошибки наследуют ValueError, чтобы их можно было ловить «по-старому».
Модуль не импортирует другие части speclab (нет циклических импортов).
"""

from __future__ import annotations

from typing import Iterable, Tuple


class SpecLabError(Exception):
    """Базовое исключение пакета."""


class RecordStructureError(SpecLabError, ValueError):
    """Коллекция записей не прошла структурную проверку."""


class HeaderError(SpecLabError, ValueError):
    """Ошибка поля заголовка (имя, значение или согласованность с данными)."""


class NonSpectralRecordError(SpecLabError, ValueError):
    """
    Операция допустима только над спектральными записями.

    Атрибуты
    --------
    indices : tuple[int, ...]
        Позиции «неспектральных» записей во входном батче.
    """

    def __init__(self, indices: Iterable[int], message: str | None = None):
        self.indices: Tuple[int, ...] = tuple(int(i) for i in indices)
        if message is None:
            message = (
                "Недопустимая операция над неспектральными записями: "
                f"индексы {list(self.indices)}"
            )
        super().__init__(message)


__all__ = [
    "SpecLabError",
    "RecordStructureError",
    "HeaderError",
    "NonSpectralRecordError",
]
