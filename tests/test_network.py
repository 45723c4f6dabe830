# tests/test_network.py
"""
Мост SpectralRecord ⇄ skrf.Network.

    ✓ раскладка каналов S11, S12, S21, S22 по парам столбцов;
    ✓ частотная сетка → b / delta и обратно;
    ✓ AMPH-режим и совместимость с rlim2amph;
    ✓ ошибки: «неквадратное» число каналов, запись без данных.
"""

from __future__ import annotations

import numpy as np
import pytest
import skrf as rf

from speclab import FileType, SpectralRecord, from_network, rlim2amph, to_network


def _assert_network_equal(a: rf.Network, b: rf.Network, *, atol=1e-8, rtol=1e-6):
    assert a.number_of_ports == b.number_of_ports
    np.testing.assert_allclose(a.f, b.f, atol=0, rtol=1e-12)
    np.testing.assert_allclose(a.s, b.s, atol=atol, rtol=rtol)


def test_from_network_layout(dummy_network):
    rec = from_network(dummy_network, name="dut")

    assert rec.iftype is FileType.RLIM
    assert rec.dep.shape == (5, 8)
    assert rec.ncmp == 4
    assert rec.b == pytest.approx(1e9)
    assert rec.delta == pytest.approx(1e9)
    # третий канал = S21 (построчно: S11, S12, S21, S22)
    s21 = dummy_network.s[:, 1, 0]
    np.testing.assert_allclose(rec.dep[:, 4], s21.real)
    np.testing.assert_allclose(rec.dep[:, 5], s21.imag)


def test_roundtrip(dummy_network):
    net = to_network(from_network(dummy_network))
    _assert_network_equal(net, dummy_network)


def test_roundtrip_ghz_unit(dummy_network):
    net = to_network(from_network(dummy_network), unit="GHz")
    assert net.frequency.unit.lower() == "ghz"
    _assert_network_equal(net, dummy_network)


def test_amph_matches_rlim2amph(dummy_network):
    amph = from_network(dummy_network, representation="iamph")
    conv = rlim2amph(from_network(dummy_network))

    assert amph.iftype is FileType.AMPH
    np.testing.assert_allclose(amph.dep, conv.dep, rtol=1e-12, atol=1e-15)
    _assert_network_equal(to_network(amph), dummy_network)


def test_precision(dummy_network):
    rec = from_network(dummy_network, precision=np.float32)
    assert rec.dep.dtype == np.float32


def test_non_spectral_representation(dummy_network):
    with pytest.raises(ValueError):
        from_network(dummy_network, representation=FileType.TIME)


def test_to_network_errors(rng):
    z = rng.standard_normal((4, 3)) + 0j
    with pytest.raises(ValueError):
        to_network(SpectralRecord.from_complex(z, delta=1.0, b=0.0))

    with pytest.raises(ValueError):
        to_network(SpectralRecord(iftype=FileType.RLIM))

    with pytest.raises(ValueError):
        to_network(SpectralRecord.from_complex(z[:, :1]))  # delta = NaN
