#!/usr/bin/env python3
"""Benchmark CSF-to-determinant expansion runtime."""

from __future__ import annotations

import argparse
import json
import time
from datetime import datetime, timezone
from pathlib import Path

import numpy as np

from csf2det import expand_csf


CASE_CATALOG = {
    "singlet8": {"name": "singlet8", "stepvec": "22" + "ud" * 4 + "00", "twoms": 0},
    "singlet12": {"name": "singlet12", "stepvec": "2" + "uudd" * 3 + "0", "twoms": 0},
    "triplet10": {"name": "triplet10", "stepvec": "u" * 2 + "ud" * 4, "twoms": 0},
    "doublet13": {"name": "doublet13", "stepvec": "2" + "ud" * 6 + "u0", "twoms": 1},
    "octet14": {"name": "octet14", "stepvec": "u" * 7 + "ud" * 3 + "0", "twoms": 1},
}


def _run_single(case: dict) -> dict:
    t0 = time.perf_counter()
    exp = expand_csf(case["stepvec"], case["twoms"], max_combinations=0)
    dt = time.perf_counter() - t0
    return {
        "wall_s": float(dt),
        "n_combinations": int(exp.n_combinations),
        "n_determinants": len(exp),
        "norm_ok": bool(exp.norm() == 1),
    }


def _summarize(samples):
    walls = np.asarray([s["wall_s"] for s in samples], dtype=float)
    return {
        "n": int(walls.size),
        "min_s": float(walls.min()),
        "median_s": float(np.median(walls)),
        "mean_s": float(walls.mean()),
        "std_s": float(walls.std()),
    }


def _resolve_cases(case_csv: str):
    names = [x.strip() for x in str(case_csv).split(",") if x.strip()]
    unknown = [n for n in names if n not in CASE_CATALOG]
    if unknown:
        raise SystemExit(f"unknown case(s): {', '.join(unknown)}; available: {', '.join(CASE_CATALOG)}")
    return [CASE_CATALOG[n] for n in names]


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark CSF expansion runtimes")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("docs/bench/expand_baseline.json"),
        help="Where to write the JSON report",
    )
    parser.add_argument("--cases", default=",".join(CASE_CATALOG), help="Comma-separated case names")
    parser.add_argument("--repeat", type=int, default=3, help="Warm repeats per case")
    parser.add_argument("--warmup", type=int, default=1, help="Discarded warmup runs")
    parser.add_argument("--strict", action="store_true", help="Fail if any expansion is not normalized")
    args = parser.parse_args()

    if args.repeat < 1:
        raise SystemExit("--repeat must be >= 1")
    if args.warmup < 0:
        raise SystemExit("--warmup must be >= 0")

    cases = _resolve_cases(args.cases)
    rows = []
    had_error = False
    for case in cases:
        for _ in range(int(args.warmup)):
            _run_single(case)
        samples = [_run_single(case) for _ in range(int(args.repeat))]
        if not all(s["norm_ok"] for s in samples):
            had_error = True
        rows.append(
            {
                "case": case["name"],
                "stepvec": case["stepvec"],
                "twoms": int(case["twoms"]),
                "n_combinations": samples[0]["n_combinations"],
                "n_determinants": samples[0]["n_determinants"],
                "summary": _summarize(samples),
                "samples": samples,
            }
        )
        print(f"{case['name']}: {samples[0]['n_determinants']} dets, median {rows[-1]['summary']['median_s']:.4f} s")

    out = {
        "schema_version": 1,
        "created_at_utc": datetime.now(timezone.utc).isoformat(),
        "repeat": int(args.repeat),
        "warmup": int(args.warmup),
        "cases": [c["name"] for c in cases],
        "rows": rows,
    }

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(json.dumps(out, indent=2), encoding="utf-8")
    print(f"Wrote benchmark report to {args.output}")

    if args.strict and had_error:
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
