# speclab/transforms/spectral.py
"""
speclab.transforms.spectral
---------------------------
Переключение представления спектральных записей:

* rlim2amph  – Re/Im  → амплитуда/фаза
* amph2rlim  – амплитуда/фаза → Re/Im
* ToAmph / ToRlim – те же операции в виде callable-трансформов (для TComposite)

Типичный сценарий: перемножить два спектра удобно в Re/Im, а, например,
сгладить амплитуду – в амплитуде/фазе:

    recs = amph2rlim(recs)
    prod = SpectralRecord.from_complex(recs[0].to_complex() * recs[1].to_complex())
    prod = rlim2amph(prod)

Общие правила обеих операций
----------------------------
1. Батч проверяется целиком *до* любых изменений: если хотя бы одна запись
   не спектральная – NonSpectralRecordError, ни одна запись не тронута.
2. Записи без данных пропускаются (статистика остаётся NaN).
3. Записи, уже находящиеся в целевом представлении, не изменяются
   (операции идемпотентны).
4. Вычисления ведутся в рабочей точности (config.work_dtype), результат
   приводится обратно к `record.precision`.
5. depmen/depmin/depmax всегда пересчитываются по итоговому dep,
   iftype всех записей батча выставляется в целевой тип.
"""

from __future__ import annotations

import logging
import math
import warnings
from typing import Callable, List, Optional, Sequence, Tuple, Union

import numpy as np
from tqdm.auto import tqdm

from speclab.config import DEFAULT_CONFIG, ConvertConfig
from speclab.errors import HeaderError, NonSpectralRecordError, RecordStructureError
from speclab.header import SPECTRAL_TYPES, FileType, change_header, check_header
from speclab.io.record import SpectralRecord, check_records

_log = logging.getLogger(__name__)

Records = Union[SpectralRecord, Sequence[SpectralRecord]]
Kernel = Callable[[np.ndarray], np.ndarray]


# --------------------------------------------------------------------- helpers
def dep_stats(dep: np.ndarray) -> Tuple[float, float, float]:
    """
    (depmen, depmin, depmax) по всем элементам dep.

    Среднее учитывает NaN, min/max – игнорируют. Для пустой матрицы – NaN.
    """
    if dep.size == 0:
        return math.nan, math.nan, math.nan
    with warnings.catch_warnings():
        # nanmin/nanmax на матрице из одних NaN → "All-NaN slice"
        warnings.simplefilter("ignore", RuntimeWarning)
        return float(np.mean(dep)), float(np.nanmin(dep)), float(np.nanmax(dep))


def _cast_back(x: np.ndarray, precision: np.dtype) -> np.ndarray:
    """Приведение результата к исходной точности записи."""
    if np.issubdtype(precision, np.integer):
        info = np.iinfo(precision)
        x = np.clip(np.rint(x), info.min, info.max)   # округление с насыщением
    return x.astype(precision, copy=False)


def _rlim_to_amph(x: np.ndarray) -> np.ndarray:
    re, im = x[:, 0::2], x[:, 1::2]
    out = np.empty_like(x)
    out[:, 0::2] = np.hypot(re, im)        # |z|
    out[:, 1::2] = np.arctan2(im, re)      # ∠z ∈ (-π, π]
    return out


def _amph_to_rlim(x: np.ndarray) -> np.ndarray:
    amp, phi = x[:, 0::2], x[:, 1::2]
    out = np.empty_like(x)
    out[:, 0::2] = amp * np.cos(phi)
    out[:, 1::2] = amp * np.sin(phi)
    return out


def _spectral_type(value) -> Optional[FileType]:
    """iftype → RLIM/AMPH; всё остальное (в т.ч. неразбираемое) → None."""
    try:
        ftype = FileType.parse(value)
    except HeaderError:
        return None
    return ftype if ftype in SPECTRAL_TYPES else None


def _validate(batch: Sequence[SpectralRecord], check: bool) -> List[FileType]:
    """
    Проверки батча; бросает исключение до любых изменений записей.

    Возвращает разобранный iftype каждой записи.
    """
    if check:
        msg = check_records(batch, require=("dep",))
        if msg:
            raise RecordStructureError(msg)
        check_header(batch)

    types = [_spectral_type(rec.iftype) for rec in batch]
    bad = [i for i, t in enumerate(types) if t is None]
    if bad:
        raise NonSpectralRecordError(bad)
    return types


# ===================================================================== ядро
def _convert(
    records: Records,
    *,
    source: FileType,
    target: FileType,
    kernel: Kernel,
    check: Optional[bool],
    config: Optional[ConvertConfig],
    logger: Optional[logging.Logger],
) -> Records:
    cfg = config or DEFAULT_CONFIG
    log = logger or _log
    batch: Sequence[SpectralRecord] = [records] if isinstance(records, SpectralRecord) else records

    types = _validate(batch, cfg.check_headers if check is None else bool(check))

    work = cfg.work_np_dtype
    n = len(batch)
    new_dep: List[Optional[np.ndarray]] = [None] * n
    depmen = np.full(n, np.nan)
    depmin = np.full(n, np.nan)
    depmax = np.full(n, np.nan)

    # 1) считаем всё «в сторону», записи пока не трогаем
    iterator = enumerate(batch)
    if cfg.show_progress:
        iterator = tqdm(iterator, total=n, desc=f"{source.value}→{target.value}")

    n_conv = n_skip = 0
    for i, rec in iterator:
        if rec.is_dataless:
            n_skip += 1
            continue

        dep = rec.dep
        if types[i] is source:
            dep = _cast_back(kernel(dep.astype(work)), rec.precision)
            new_dep[i] = dep
            n_conv += 1

        depmen[i], depmin[i], depmax[i] = dep_stats(dep)

    # 2) фиксируем данные и заголовок
    for rec, dep in zip(batch, new_dep):
        if dep is not None:
            rec.dep = dep
    change_header(batch, iftype=target, depmax=depmax, depmin=depmin, depmen=depmen)

    log.debug(
        "%s→%s: records=%d converted=%d dataless=%d passthrough=%d",
        source.value, target.value, n, n_conv, n_skip, n - n_conv - n_skip,
    )
    return records


def rlim2amph(
    records: Records,
    *,
    check: Optional[bool] = None,
    config: Optional[ConvertConfig] = None,
    logger: Optional[logging.Logger] = None,
) -> Records:
    """
    Переводит спектральные записи из Re/Im в амплитуду/фазу.

    Для каждого канала k:  A = |Re + j·Im|,  φ = atan2(Im, Re).
    Записи AMPH не изменяются. Изменяемые поля заголовка:
    iftype, depmen, depmin, depmax.

    Parameters
    ----------
    records : SpectralRecord | Sequence[SpectralRecord]
        Батч (изменяется на месте и возвращается). Пустой батч допустим.
    check : bool | None
        Структурная проверка записей и заголовков. None → config.check_headers.
    config : ConvertConfig | None
        Рабочая точность, прогрессбар, проверки по умолчанию.
    logger : logging.Logger | None
        Куда писать отладочную сводку (по умолчанию – логгер модуля).

    Raises
    ------
    RecordStructureError / HeaderError
        Батч не прошёл структурную проверку (только при check).
    NonSpectralRecordError
        В батче есть неспектральная запись; ни одна запись не изменена.

    Examples
    --------
    >>> rec = SpectralRecord(dep=np.array([[3.0, 4.0]]), iftype="irlim")
    >>> rlim2amph(rec).dep
    array([[5.        , 0.92729522]])
    """
    return _convert(
        records,
        source=FileType.RLIM,
        target=FileType.AMPH,
        kernel=_rlim_to_amph,
        check=check,
        config=config,
        logger=logger,
    )


def amph2rlim(
    records: Records,
    *,
    check: Optional[bool] = None,
    config: Optional[ConvertConfig] = None,
    logger: Optional[logging.Logger] = None,
) -> Records:
    """
    Обратная к rlim2amph операция: Re = A·cos φ, Im = A·sin φ.

    Записи RLIM не изменяются, все записи батча получают iftype=RLIM.
    Параметры и исключения – как у rlim2amph.
    """
    return _convert(
        records,
        source=FileType.AMPH,
        target=FileType.RLIM,
        kernel=_amph_to_rlim,
        check=check,
        config=config,
        logger=logger,
    )


# ============================================================ callable-обёртки
class ToAmph:
    """
    Трансформ «→ амплитуда/фаза».

    Parameters
    ----------
    check : bool | None
        См. rlim2amph().
    config : ConvertConfig | None
        См. rlim2amph().
    """

    def __init__(self, *, check: Optional[bool] = None, config: Optional[ConvertConfig] = None):
        self.check = check
        self.config = config

    def __call__(self, records: Records) -> Records:
        return rlim2amph(records, check=self.check, config=self.config)


class ToRlim:
    """Трансформ «→ Re/Im» (см. amph2rlim)."""

    def __init__(self, *, check: Optional[bool] = None, config: Optional[ConvertConfig] = None):
        self.check = check
        self.config = config

    def __call__(self, records: Records) -> Records:
        return amph2rlim(records, check=self.check, config=self.config)


# --------------------------------------------------------------------- экспорт
__all__ = [
    "dep_stats",
    "rlim2amph",
    "amph2rlim",
    "ToAmph",
    "ToRlim",
]
