# speclab/config.py
"""
Конфигурация операций конвертации.

Вместо глобального флага «проверять/не проверять заголовки» настройки
передаются явно: объектом ConvertConfig или аргументом `check=` самой
операции. Конфиг можно загрузить из YAML:

    # speclab.yml
    convert:
      check_headers: false
      work_dtype: float64
      show_progress: true
"""

from __future__ import annotations

import os
from dataclasses import dataclass, asdict
from pathlib import Path

import numpy as np
import yaml


@dataclass(frozen=True)
class ConvertConfig:
    check_headers: bool = True      # структурная проверка записей + check_header
    work_dtype: str = "float64"     # рабочая точность для тригонометрии/модуля
    show_progress: bool = False     # tqdm-прогрессбар по записям батча

    def __post_init__(self):
        self.work_np_dtype  # ранняя проверка work_dtype

    @property
    def work_np_dtype(self) -> np.dtype:
        dt = np.dtype(self.work_dtype)
        if dt.kind != "f":
            raise ValueError(
                f"work_dtype должен быть вещественным float-типом, получено {self.work_dtype!r}"
            )
        return dt

    def to_dict(self) -> dict:
        return asdict(self)


DEFAULT_CONFIG = ConvertConfig()


def load_config(path: str | os.PathLike) -> ConvertConfig:
    """
    Читает ConvertConfig из YAML-файла.

    Ключи берутся из секции ``convert:``, а если её нет – с верхнего уровня.
    Неизвестные ключи приводят к TypeError (от конструктора dataclass).
    """
    path = Path(path).resolve()
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    # пустая секция «convert:» → None
    section = data["convert"] if "convert" in data else data
    return ConvertConfig(**(section or {}))


__all__ = ["ConvertConfig", "DEFAULT_CONFIG", "load_config"]
