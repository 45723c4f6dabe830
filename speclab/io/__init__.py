#speclab/io/__init__.py
"""
speclab.io
----------
Контейнер спектральных записей и мосты к внешним форматам.
"""

from .record import SpectralRecord, check_records
from .network import from_network, to_network

__all__ = ["SpectralRecord", "check_records", "from_network", "to_network"]
