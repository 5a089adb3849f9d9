from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from csf2det import config
from csf2det.errors import CSFExpansionError
from csf2det.expand import expand_csf
from csf2det.record import expansion_snapshot, snapshot_to_json, write_snapshot


def run(
    stepvec: str,
    twoms: int,
    *,
    verbose: int = 0,
    as_json: bool = False,
    output: Path | None = None,
    max_combinations: int | None = None,
    stdout: Any = None,
    stderr: Any = None,
) -> int:
    """Expand one CSF and print the result; return the process exit status."""
    out = sys.stdout if stdout is None else stdout
    err = sys.stderr if stderr is None else stderr
    # stdout carries only the snapshot in JSON mode
    diag = err if as_json else out
    try:
        expansion = expand_csf(
            stepvec,
            twoms,
            verbose=verbose,
            stdout=diag,
            max_combinations=max_combinations,
        )
    except CSFExpansionError as e:
        print(f"Error: {e}", file=err)
        return 1

    if output is not None or as_json:
        snapshot = expansion_snapshot(expansion)
        if output is not None:
            write_snapshot(output, snapshot)
            if verbose >= 1:
                print(f"Wrote expansion snapshot to {output}", file=diag)
        if as_json:
            out.write(snapshot_to_json(snapshot))
            return 0

    for line in expansion.lines():
        print(line, file=out)
    return 0


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="csf2det",
        description="Expand a configuration state function into Slater determinants (output = phase * C^2 * SD).",
    )
    ap.add_argument("stepvec", help='step vector over {0,u,d,2}, e.g. "2udu u0"')
    ap.add_argument("twoms", type=int, help="2*Ms, the spin projection in units of one half")
    ap.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=None,
        help="print extra information; repeat for per-determinant detail (default: CSF2DET_VERBOSE)",
    )
    ap.add_argument("--json", action="store_true", help="print a JSON snapshot instead of text (default: CSF2DET_JSON)")
    ap.add_argument("--output", type=Path, default=None, help="also write the JSON snapshot to this file")
    ap.add_argument(
        "--max-combinations",
        type=int,
        default=None,
        help="refuse expansions with more alpha/beta assignments (0 = unlimited, default: CSF2DET_MAX_COMBINATIONS)",
    )
    args = ap.parse_args(argv)

    try:
        verbose = config.default_verbose() if args.verbose is None else int(args.verbose)
        as_json = bool(args.json) or config.json_output()
        max_combinations = args.max_combinations
        if max_combinations is None:
            max_combinations = config.default_max_combinations() or 0
    except ValueError as e:
        raise SystemExit(str(e)) from e

    return run(
        args.stepvec,
        args.twoms,
        verbose=verbose,
        as_json=as_json,
        output=args.output,
        max_combinations=max_combinations,
    )


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
