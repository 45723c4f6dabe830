# speclab/header.py
"""
speclab.header
--------------
Реестр полей заголовка спектральных записей.

* FileType          – перечисление поля `iftype` (тип файла/представление)
* HEADER_FIELDS     – записываемые поля заголовка и их приведение типов
* get_enum_desc()   – «человеческие» описания перечислимого поля по батчу
* change_header()   – пакетное обновление полей заголовка
* check_header()    – проверка согласованности заголовка и данных

Модуль работает с записями «утиным» образом (через атрибуты), поэтому
не импортирует speclab.io.record.
"""

from __future__ import annotations

import enum
from typing import Any, Callable, Dict, List, Sequence

import numpy as np

from speclab.errors import HeaderError


# ===================================================================== iftype
class FileType(enum.Enum):
    """
    Значения поля `iftype`.

    Спектральными являются только RLIM (Re/Im) и AMPH (амплитуда/фаза),
    остальные типы конвертеры спектров отвергают.
    """

    TIME = "itime"
    RLIM = "irlim"
    AMPH = "iamph"
    XY = "ixy"
    XYZ = "ixyz"

    @property
    def description(self) -> str:
        return _IFTYPE_DESC[self]

    @property
    def is_spectral(self) -> bool:
        return self in SPECTRAL_TYPES

    @classmethod
    def parse(cls, value: Any) -> "FileType":
        """
        Приводит значение к FileType.

        Допускается: сам член перечисления, id ('irlim') или описание
        ('Spectral File-Real/Imag'); регистр не важен.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key in (member.value, member.description.lower()):
                    return member
        raise HeaderError(f"Недопустимое значение iftype: {value!r}")

    def __str__(self) -> str:
        return self.value


_IFTYPE_DESC: Dict[FileType, str] = {
    FileType.TIME: "Time Series File",
    FileType.RLIM: "Spectral File-Real/Imag",
    FileType.AMPH: "Spectral File-Ampl/Phase",
    FileType.XY: "General X vs Y file",
    FileType.XYZ: "General XYZ (3-D) file",
}

SPECTRAL_TYPES = frozenset({FileType.RLIM, FileType.AMPH})


# -------------------------------------------------------------- реестр полей
def _as_float(v: Any) -> float:
    return float(v) if v is not None else float("nan")


HEADER_FIELDS: Dict[str, Callable[[Any], Any]] = {
    "iftype": FileType.parse,
    "depmin": _as_float,
    "depmax": _as_float,
    "depmen": _as_float,
    "delta": _as_float,
    "b": _as_float,
    "npts": int,
    "ncmp": int,
}

# поля с перечислимыми значениями
ENUM_FIELDS = {"iftype": FileType}


# ================================================================== операции
def get_enum_desc(records: Sequence[Any], field: str = "iftype") -> List[str]:
    """Описания перечислимого поля *field* для каждой записи батча."""
    if field not in ENUM_FIELDS:
        raise HeaderError(f"Поле {field!r} не является перечислимым")
    enum_cls = ENUM_FIELDS[field]
    return [enum_cls.parse(getattr(r, field)).description for r in records]


def _broadcast(name: str, value: Any, n: int) -> list:
    """Скаляр → n копий; последовательность длины n → как есть."""
    if isinstance(value, (str, enum.Enum)) or np.ndim(value) == 0:
        return [value] * n
    values = list(np.ravel(value)) if isinstance(value, np.ndarray) else list(value)
    if len(values) != n:
        raise ValueError(
            f"{name}: ожидается скаляр или {n} значений, получено {len(values)}"
        )
    return values


def change_header(records: Sequence[Any], **fields: Any) -> Sequence[Any]:
    """
    Пакетное обновление полей заголовка.

    Скалярное значение применяется ко всем записям, последовательность
    (list / ndarray) длины ``len(records)`` – поэлементно. Все значения
    сначала приводятся и проверяются, и только потом записываются:
    при ошибке ни одна запись не изменяется.

    Examples
    --------
    >>> change_header(recs, iftype="iamph", depmax=[1.0, 2.0], depmin=0.0)
    """
    n = len(records)
    staged: Dict[str, list] = {}
    for name, value in fields.items():
        if name not in HEADER_FIELDS:
            raise HeaderError(f"Неизвестное поле заголовка: {name!r}")
        cast = HEADER_FIELDS[name]
        staged[name] = [cast(v) for v in _broadcast(name, value, n)]

    for name, values in staged.items():
        for rec, v in zip(records, values):
            setattr(rec, name, v)
    return records


def check_header(records: Sequence[Any]) -> None:
    """
    Проверяет согласованность заголовков с данными; ничего не меняет.

    * iftype – член FileType;
    * у записей с данными dep двумерен и npts == число строк;
    * у спектральных записей чётное число столбцов и ncmp == столбцы / 2.
    """
    for i, rec in enumerate(records):
        if not isinstance(rec.iftype, FileType):
            raise HeaderError(f"Запись {i}: iftype={rec.iftype!r} не является FileType")

        dep = rec.dep
        if dep.size == 0:
            continue
        if dep.ndim != 2:
            raise HeaderError(f"Запись {i}: dep должен быть 2-D, получено ndim={dep.ndim}")
        if rec.npts != dep.shape[0]:
            raise HeaderError(
                f"Запись {i}: npts={rec.npts} не совпадает с числом отсчётов {dep.shape[0]}"
            )
        if rec.iftype.is_spectral:
            ncol = dep.shape[1]
            if ncol % 2:
                raise HeaderError(
                    f"Запись {i}: спектральная запись с нечётным числом столбцов ({ncol})"
                )
            if rec.ncmp != ncol // 2:
                raise HeaderError(
                    f"Запись {i}: ncmp={rec.ncmp} не совпадает с числом каналов {ncol // 2}"
                )


__all__ = [
    "FileType",
    "SPECTRAL_TYPES",
    "HEADER_FIELDS",
    "get_enum_desc",
    "change_header",
    "check_header",
]
