# speclab/io/network.py
"""
speclab.io.network
------------------
Мост SpectralRecord ⇄ skrf.Network.

Каждый элемент S_ij сети становится отдельным каналом записи (парой
столбцов dep); порядок каналов – построчный по (i, j):

    S11, S12, …, S1P, S21, …, SPP

Частотная сетка сети описывается полями записи `b` (первая частота, Гц)
и `delta` (шаг, Гц), поэтому обратное преобразование требует
равномерной сетки.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np
import skrf as rf

from speclab.header import FileType
from speclab.io.record import SpectralRecord


def from_network(
    net: rf.Network,
    *,
    representation: FileType | str = FileType.RLIM,
    precision=np.float64,
    name: Optional[str] = None,
) -> SpectralRecord:
    """
    skrf.Network → SpectralRecord.

    Parameters
    ----------
    representation : FileType | str
        RLIM ('irlim') – Re/Im; AMPH ('iamph') – амплитуда/фаза (рад).
    precision : dtype
        Точность dep итоговой записи.
    """
    rep = FileType.parse(representation)
    if not rep.is_spectral:
        raise ValueError(f"representation должен быть спектральным, получено {rep.description!r}")

    f = np.asarray(net.f, dtype=np.float64)  # Гц
    n_ports = net.number_of_ports
    z = np.asarray(net.s).reshape(len(f), n_ports * n_ports)

    delta = float(f[1] - f[0]) if len(f) > 1 else math.nan
    if rep is FileType.RLIM:
        rec = SpectralRecord.from_complex(z, delta=delta, b=float(f[0]), precision=precision, name=name)
    else:
        dep = np.empty((z.shape[0], 2 * z.shape[1]), dtype=np.float64)
        dep[:, 0::2] = np.abs(z)
        dep[:, 1::2] = np.angle(z)
        rec = SpectralRecord(
            dep=dep.astype(precision),
            iftype=FileType.AMPH,
            delta=delta,
            b=float(f[0]),
            name=name,
        )
    return rec


def to_network(
    record: SpectralRecord,
    *,
    n_ports: Optional[int] = None,
    unit: str = "Hz",
) -> rf.Network:
    """
    SpectralRecord → skrf.Network.

    • число каналов должно быть n_ports²;
    • частоты: b + delta·k, k = 0…npts-1 (для одной точки – только b);
    • unit – единица, в которой сеть будет хранить частотную ось.
    """
    if record.is_dataless:
        raise ValueError("Запись без данных нельзя превратить в Network")

    z = record.to_complex()
    npts, nchan = z.shape
    if n_ports is None:
        n_ports = math.isqrt(nchan)
    if n_ports * n_ports != nchan:
        raise ValueError(f"Число каналов {nchan} не равно n_ports²={n_ports}²")

    if npts > 1 and not math.isfinite(record.delta):
        raise ValueError("Для сетки из нескольких точек нужен конечный delta")
    step = record.delta if npts > 1 else 0.0
    f_hz = record.b + step * np.arange(npts, dtype=np.float64)

    mult = rf.Frequency.multiplier_dict[unit.lower()]
    freq = rf.Frequency.from_f(f_hz / mult, unit=unit)
    s = z.reshape(npts, n_ports, n_ports)
    net = rf.Network(frequency=freq, s=s)
    if record.name:
        net.name = record.name
    return net


__all__ = ["from_network", "to_network"]
