from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any, Iterator, Sequence

import numpy as np

from csf2det.combinations import validate_spin_coupling
from csf2det.expand import CSFExpansion
from csf2det.tableau import STEP_ORDER


def iter_spin_couplings(nspin: int, twos: int) -> Iterator[str]:
    """Yield every ``u``/``d`` coupling of *nspin* open shells to total spin *twos*.

    Couplings come out with ``u`` ordered before ``d``; the running spin never
    drops below zero. The number of yielded strings is ``count_spin_couplings(nspin, twos)``.
    """
    nspin = int(nspin)
    twos = int(twos)
    validate_spin_coupling(nspin, twos)
    if twos > nspin:
        return

    buf: list[str] = []

    def dfs(k: int, cur: int) -> Iterator[str]:
        if k == nspin:
            if cur == twos:
                yield "".join(buf)
            return
        remaining = nspin - k - 1
        for step, dspin in (("u", 1), ("d", -1)):
            nxt = cur + dspin
            if nxt < 0 or abs(nxt - twos) > remaining:
                continue
            buf.append(step)
            yield from dfs(k + 1, nxt)
            buf.pop()

    yield from dfs(0, 0)


def iter_step_vectors(occ: Sequence[int], twos: int) -> Iterator[str]:
    """Yield the step vectors of all CSFs with orbital occupancies *occ*.

    Parameters
    ----------
    occ : sequence of int
        Occupancy (0, 1 or 2) per orbital.
    twos : int
        Twice the total spin (2S).
    """
    occ = np.asarray(occ, dtype=np.int8).ravel()
    if np.any((occ < 0) | (occ > 2)):
        raise ValueError("occ entries must be 0, 1 or 2")
    open_shells = np.flatnonzero(occ == 1)
    template = ["0" if int(o) == 0 else ("2" if int(o) == 2 else "") for o in occ]
    for coupling in iter_spin_couplings(int(open_shells.size), twos):
        steps = list(template)
        for pos, step in zip(open_shells, coupling):
            steps[int(pos)] = step
        yield "".join(steps)


def expansion_snapshot(expansion: CSFExpansion) -> dict[str, Any]:
    """Build a JSON-serializable snapshot of a CSF expansion.

    Returns
    -------
    dict
        Nested dict with keys ``"case"``, ``"tableau"``, ``"determinants"``
        and ``"summary"``.
    """
    tab = expansion.tableau
    dets = [
        {
            "det": d.string,
            "phase": int(d.phase),
            "weight": str(d.weight),
            "amplitude": float(d.amplitude),
        }
        for d in expansion.determinants
    ]
    dets_digest = hashlib.sha256(
        json.dumps(dets, sort_keys=True, separators=(",", ":")).encode("utf-8")
    ).hexdigest()
    return {
        "case": {
            "stepvec": expansion.stepvec,
            "twoms": int(expansion.twoms),
            "ms": str(expansion.ms),
        },
        "tableau": {
            "a": tab.a.tolist(),
            "b": tab.b.tolist(),
            "c": tab.c.tolist(),
            "step_indices": [STEP_ORDER.index(s) for s in tab.stepvec],
            "n_e": int(tab.n_e),
            "n_mo": int(tab.n_mo),
            "n_somo": int(tab.n_somo),
            "twos": int(tab.twos),
        },
        "determinants": dets,
        "summary": {
            "n_alpha": int(expansion.n_alpha),
            "n_combinations": int(expansion.n_combinations),
            "n_forbidden": int(expansion.n_forbidden),
            "norm": str(expansion.norm()),
            "determinants_sha256": dets_digest,
        },
    }


def snapshot_to_json(snapshot: dict[str, Any]) -> str:
    """Serialize a snapshot dict to a pretty-printed JSON string."""
    return json.dumps(snapshot, indent=2, sort_keys=True) + "\n"


def write_snapshot(path: str | Path, snapshot: dict[str, Any]) -> None:
    """Write a snapshot dict to *path* as JSON."""
    path = Path(path)
    path.write_text(snapshot_to_json(snapshot), encoding="utf-8")
