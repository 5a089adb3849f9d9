from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

import pytest

_BENCH_PATH = Path(__file__).resolve().parents[1] / "bench" / "expand_bench.py"


def _load_bench():
    spec = importlib.util.spec_from_file_location("expand_bench", _BENCH_PATH)
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


@pytest.mark.parametrize(
    "flags,message",
    [
        (["--repeat", "0"], "--repeat must be >= 1"),
        (["--warmup", "-1"], "--warmup must be >= 0"),
    ],
)
def test_bench_rejects_bad_counts(monkeypatch, tmp_path, flags, message):
    bench = _load_bench()
    out = tmp_path / "report.json"
    monkeypatch.setattr(sys, "argv", ["expand_bench.py", "--output", str(out), "--cases", "singlet8", *flags])
    with pytest.raises(SystemExit) as exc:
        bench.main()
    assert str(exc.value) == message
    assert not out.exists()
