# tests/test_config.py
import numpy as np
import pytest

from speclab import ConvertConfig, load_config
from speclab.config import DEFAULT_CONFIG


def test_defaults():
    assert DEFAULT_CONFIG.check_headers is True
    assert DEFAULT_CONFIG.work_np_dtype == np.float64
    assert DEFAULT_CONFIG.show_progress is False


def test_bad_work_dtype():
    with pytest.raises(ValueError):
        ConvertConfig(work_dtype="int32")


def test_load_section(tmp_dir):
    fp = tmp_dir / "speclab.yml"
    fp.write_text(
        "convert:\n"
        "  check_headers: false\n"
        "  work_dtype: float32\n"
        "  show_progress: true\n",
        encoding="utf-8",
    )
    cfg = load_config(fp)
    assert cfg == ConvertConfig(check_headers=False, work_dtype="float32", show_progress=True)
    assert cfg.to_dict()["work_dtype"] == "float32"


def test_load_top_level_and_empty(tmp_dir):
    fp = tmp_dir / "flat.yml"
    fp.write_text("check_headers: false\n", encoding="utf-8")
    assert load_config(fp).check_headers is False

    empty = tmp_dir / "empty.yml"
    empty.write_text("", encoding="utf-8")
    assert load_config(empty) == DEFAULT_CONFIG


def test_load_errors(tmp_dir):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_dir / "missing.yml")

    fp = tmp_dir / "bad.yml"
    fp.write_text("convert:\n  check_header: true\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_config(fp)


def test_load_empty_section(tmp_dir):
    fp = tmp_dir / "bare.yml"
    fp.write_text("convert:\n", encoding="utf-8")
    assert load_config(fp) == DEFAULT_CONFIG
