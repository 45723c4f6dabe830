# speclab/io/record.py
"""
speclab.io.record
-----------------
Базовый контейнер SpectralRecord + (де)сериализация в NumPy‑словарь.

Основные возможности:

* SpectralRecord(dep, iftype=...)        – создание «с нуля»
* SpectralRecord.from_complex(z, ...)    – RLIM-запись из комплексной матрицы
* .to_complex()                          – комплексная матрица из RLIM/AMPH
* .to_numpy() / .from_numpy()            – сериализация в NumPy-словарь
  для хранения в бинарных backend-ах (HDF5, LMDB, Zarr и т.п.).

Раскладка `dep` (npts × 2·ncmp): столбцы идут парами, по паре на канал.
    RLIM:  [Re₁, Im₁, Re₂, Im₂, ...]
    AMPH:  [|z₁|, ∠z₁, |z₂|, ∠z₂, ...]   (фаза в радианах)
"""

from __future__ import annotations

import copy
import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np

from speclab.header import HEADER_FIELDS, FileType

_NAN = float("nan")


@dataclass(eq=False)
class SpectralRecord:
    """
    Одна спектральная запись.

    Атрибуты
    --------
    dep : np.ndarray
        Матрица (npts, 2·ncmp). Пустая матрица – «запись без данных».
    iftype : FileType
        Тег представления (RLIM / AMPH / несп. типы).
    depmen, depmin, depmax : float
        Статистика по всем элементам dep; NaN – не задана.
    delta, b : float
        Шаг и начальное значение частотной сетки.
    npts, ncmp : int
        Число отсчётов и число каналов (по умолчанию – из формы dep).
    precision : np.dtype
        Точность dep. Задаётся при создании, обновляется при переназначении
        dep и служит целевым типом при обратном приведении после конвертации.
    """

    dep: Optional[np.ndarray] = None
    iftype: FileType = FileType.RLIM
    depmen: float = _NAN
    depmin: float = _NAN
    depmax: float = _NAN
    delta: float = _NAN
    b: float = _NAN
    npts: Optional[int] = None
    ncmp: Optional[int] = None
    name: Optional[str] = None
    precision: Optional[np.dtype] = field(default=None)

    # ---------------------------------------------------------- init
    def __post_init__(self):
        self.iftype = FileType.parse(self.iftype)

        if self.dep is None:
            dt = np.dtype(self.precision) if self.precision is not None else np.dtype(np.float64)
            self.dep = np.empty((0, 0), dtype=dt)
        dep = np.asarray(self.dep)
        if dep.ndim == 1:
            dep = dep.reshape(-1, 1)

        if self.precision is None:
            self.precision = dep.dtype
        else:
            self.precision = np.dtype(self.precision)
            dep = dep.astype(self.precision, copy=False)
        self.dep = dep

        if self.npts is None:
            self.npts = int(dep.shape[0]) if dep.size else 0
        if self.ncmp is None:
            ncol = int(dep.shape[1]) if dep.ndim == 2 and dep.size else 0
            self.ncmp = ncol // 2 if self.iftype.is_spectral else ncol

    def __setattr__(self, name, value):
        # тег точности следует за dtype при любом переназначении dep
        if name == "dep" and isinstance(value, np.ndarray) and self.precision is not None:
            object.__setattr__(self, "precision", value.dtype)
        object.__setattr__(self, name, value)

    # ------------------------------------------------------- свойства
    @property
    def representation(self) -> FileType:
        return self.iftype

    @property
    def is_dataless(self) -> bool:
        return self.dep.size == 0

    # --------------------------------------------- комплексное представление
    @classmethod
    def from_complex(
        cls,
        z: np.ndarray,
        *,
        delta: float = _NAN,
        b: float = _NAN,
        precision=np.float64,
        name: Optional[str] = None,
    ) -> "SpectralRecord":
        """RLIM-запись из комплексной матрицы (npts, nchan) или вектора (npts,)."""
        z = np.asarray(z)
        if z.ndim == 1:
            z = z[:, None]
        dep = np.empty((z.shape[0], 2 * z.shape[1]), dtype=precision)
        dep[:, 0::2] = z.real
        dep[:, 1::2] = z.imag
        return cls(dep=dep, iftype=FileType.RLIM, delta=delta, b=b, name=name)

    def to_complex(self) -> np.ndarray:
        """
        Комплексная матрица (npts, ncmp) в complex128.

        RLIM → Re + j·Im;  AMPH → A·exp(j·φ).
        """
        if self.is_dataless:
            return np.empty((0, 0), dtype=np.complex128)
        dep = self.dep.astype(np.float64)
        if self.iftype is FileType.RLIM:
            return dep[:, 0::2] + 1j * dep[:, 1::2]
        if self.iftype is FileType.AMPH:
            return dep[:, 0::2] * np.exp(1j * dep[:, 1::2])
        raise ValueError(f"to_complex(): запись типа {self.iftype.description!r} не спектральная")

    # --------------------------------------------- СЕРИАЛИЗАЦИЯ → NumPy
    def to_numpy(self) -> dict[str, np.ndarray]:
        """
        Возвращает словарь ndarray-ов (готов к записи в HDF5/LMDB).

        Ключи:
            'dep'              – (npts, 2·ncmp)  исходная точность
            'meta/iftype'      – ()   S ascii
            'meta/precision'   – ()   S ascii
            'meta/name'        – ()   S ascii (если задано)
            'hdr/<поле>'       – ()   float64 / int64
        """
        out: dict[str, np.ndarray] = {"dep": self.dep}
        out["meta/iftype"] = np.bytes_(self.iftype.value)
        out["meta/precision"] = np.bytes_(self.precision.str)
        if self.name is not None:
            out["meta/name"] = np.bytes_(self.name)
        for k in ("depmen", "depmin", "depmax", "delta", "b"):
            out[f"hdr/{k}"] = np.array(getattr(self, k), dtype=np.float64)
        for k in ("npts", "ncmp"):
            out[f"hdr/{k}"] = np.array(getattr(self, k), dtype=np.int64)
        return out

    # --------------------------------------------- NumPy → SpectralRecord
    @classmethod
    def from_numpy(cls, dct: dict[str, np.ndarray]) -> "SpectralRecord":
        """Обратная операция: словарь ndarray-ов → SpectralRecord."""
        precision = np.dtype(bytes(dct["meta/precision"]).decode())
        hdr: Dict[str, Any] = {}
        for k, v in dct.items():
            if not k.startswith("hdr/"):
                continue
            name = k.split("/", 1)[1]
            hdr[name] = HEADER_FIELDS[name](np.asarray(v).item())
        name = bytes(dct["meta/name"]).decode() if "meta/name" in dct else None
        return cls(
            dep=np.array(dct["dep"], dtype=precision),
            iftype=bytes(dct["meta/iftype"]).decode(),
            precision=precision,
            name=name,
            **hdr,
        )

    def copy(self) -> "SpectralRecord":
        return copy.deepcopy(self)

    def __repr__(self) -> str:
        stats = ", ".join(
            f"{k}={v:.4g}" for k, v in (("min", self.depmin), ("men", self.depmen), ("max", self.depmax))
            if not math.isnan(v)
        ) or "—"
        return (
            f"<SpectralRecord {self.name or '?'} · {self.iftype.description} · "
            f"{self.npts}pts × {self.ncmp}ch · {self.precision} · dep[{stats}]>"
        )


# ================================================================ валидатор
def check_records(records: Any, require: Sequence[str] = ("dep",)) -> Optional[str]:
    """
    Минимальная структурная проверка коллекции записей.

    Возвращает текст ошибки или None, если всё в порядке.
    Исключение не бросает – решение принимает вызывающий код.
    """
    if isinstance(records, (str, bytes)) or not isinstance(records, Sequence):
        return f"Ожидается последовательность SpectralRecord, получено {type(records).__name__}"
    for i, rec in enumerate(records):
        if not isinstance(rec, SpectralRecord):
            return f"Элемент {i}: ожидается SpectralRecord, получено {type(rec).__name__}"
        for fld in require:
            if not hasattr(rec, fld):
                return f"Элемент {i}: отсутствует поле {fld!r}"
        if "dep" in require and not isinstance(rec.dep, np.ndarray):
            return f"Элемент {i}: поле 'dep' должно быть np.ndarray, получено {type(rec.dep).__name__}"
    return None


__all__ = ["SpectralRecord", "check_records"]
