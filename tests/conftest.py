#tests/conftest.py
"""
Общие фикстуры, доступные во всех тестах.
"""

from __future__ import annotations

import pathlib

import numpy as np
import pytest
import skrf as rf

from speclab import FileType, SpectralRecord


@pytest.fixture()
def tmp_dir(tmp_path_factory) -> pathlib.Path:
    """
    Временная директория, автоматически удаляется после теста.
    """
    return tmp_path_factory.mktemp("speclab_test")


@pytest.fixture()
def rng() -> np.random.Generator:
    return np.random.default_rng(0)


@pytest.fixture()
def rlim_record(rng) -> SpectralRecord:
    """RLIM-запись: 64 точки × 3 канала, float64."""
    z = rng.standard_normal((64, 3)) + 1j * rng.standard_normal((64, 3))
    return SpectralRecord.from_complex(z, delta=0.5, b=0.0, name="rlim")


@pytest.fixture()
def amph_record(rng) -> SpectralRecord:
    """AMPH-запись: 32 точки × 2 канала, float32."""
    dep = np.empty((32, 4), dtype=np.float32)
    dep[:, 0::2] = rng.uniform(0.1, 2.0, size=(32, 2))
    dep[:, 1::2] = rng.uniform(-np.pi, np.pi, size=(32, 2))
    return SpectralRecord(dep=dep, iftype=FileType.AMPH, delta=1.0, b=0.0, name="amph")


@pytest.fixture()
def dataless_record() -> SpectralRecord:
    """Запись только с заголовком."""
    return SpectralRecord(iftype=FileType.RLIM, name="dataless")


@pytest.fixture()
def dummy_network() -> rf.Network:
    """
    Простая 2-портовая сеть на сетке из 5 точек (1…5 ГГц)
    с ненулевыми S-параметрами, годится для round-trip тестов.
    """
    f = rf.Frequency(1, 5, 5, "GHz")
    k = np.arange(len(f))[:, None, None]
    s = (0.1 + 0.05 * k) * np.exp(1j * 0.3 * (k + np.arange(4).reshape(1, 2, 2)))
    return rf.Network(frequency=f, s=s)
