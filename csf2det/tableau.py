from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from csf2det.errors import InvalidCouplingError, InvalidStepError

# Step symbols in distinct-row-table order (E, U, L, D).
STEP_ORDER: tuple[str, ...] = ("0", "u", "d", "2")
STEP_TO_INDEX: dict[str, int] = {s: i for i, s in enumerate(STEP_ORDER)}

# (da, db, dc) per step symbol.
STEP_DELTAS: dict[str, tuple[int, int, int]] = {
    "0": (0, 0, 1),
    "u": (0, 1, 0),
    "d": (1, -1, 1),
    "2": (1, 0, 0),
}


def normalize_stepvec(stepvec: str | Sequence[int]) -> str:
    """Return the canonical ``{0,u,d,2}`` text form of a step vector.

    Parameters
    ----------
    stepvec : str or sequence of int
        Either text such as ``"2udu u0"`` (blanks are ignored) or integer step
        indices ``0..3`` in ``E, U, L, D`` order.

    Raises
    ------
    InvalidStepError
        On any symbol outside the step alphabet, or an empty step vector.
    """
    if isinstance(stepvec, str):
        out: list[str] = []
        for pos, ch in enumerate(stepvec):
            if ch == " ":
                continue
            if ch not in STEP_TO_INDEX:
                raise InvalidStepError(ch, pos)
            out.append(ch)
        text = "".join(out)
    else:
        text = path_as_stepvec(stepvec)
    if not text:
        raise InvalidStepError("", None, message="step vector is empty")
    return text


def path_as_stepvec(steps: Sequence[int]) -> str:
    """Format integer step indices (0=E, 1=U, 2=L, 3=D) as a ``{0,u,d,2}`` string."""
    out: list[str] = []
    for pos, step in enumerate(steps):
        sidx = int(step)
        if sidx != step:
            raise InvalidStepError(str(step), pos, message=f"step index {step!r} at position {pos} is not an integer")
        if sidx < 0 or sidx >= len(STEP_ORDER):
            raise InvalidStepError(str(step), pos, message=f"invalid step index {sidx} at position {pos}")
        out.append(STEP_ORDER[sidx])
    return "".join(out)


@dataclass(frozen=True, eq=False)
class PaulingTableau:
    """Cumulative Paldus ``(a, b, c)`` numbers of a step vector.

    Attributes
    ----------
    stepvec : str
        Canonical step vector, one symbol per orbital.
    a : np.ndarray
        int32 running count of doubly occupied (``2``) and paired (``d``) steps.
    b : np.ndarray
        int32 running coupled spin, 2S after each orbital.
    c : np.ndarray
        int32 running count of empty (``0``) and paired (``d``) steps.
    n_somo : int
        Number of singly occupied orbitals (``u`` and ``d`` steps).
    """

    stepvec: str
    a: np.ndarray
    b: np.ndarray
    c: np.ndarray
    n_somo: int

    @property
    def n_mo(self) -> int:
        return len(self.stepvec)

    @property
    def n_e(self) -> int:
        """Number of electrons, ``2*a[last] + b[last]``."""
        return 2 * int(self.a[-1]) + int(self.b[-1])

    @property
    def twos(self) -> int:
        """Total spin 2S of the CSF, ``b[last]``."""
        return int(self.b[-1])

    @property
    def n_domo(self) -> int:
        return self.stepvec.count("2")

    def occupations(self) -> np.ndarray:
        """Return int8 orbital occupancies (0, 1 or 2)."""
        occ = np.zeros(self.n_mo, dtype=np.int8)
        for i, s in enumerate(self.stepvec):
            if s in ("u", "d"):
                occ[i] = 1
            elif s == "2":
                occ[i] = 2
        return occ

    def check_coupling(self) -> None:
        """Raise :class:`InvalidCouplingError` if the running spin ever drops below zero."""
        neg = np.flatnonzero(self.b < 0)
        if neg.size:
            pos = int(neg[0])
            raise InvalidCouplingError(pos, int(self.b[pos]))


def build_tableau(stepvec: str | Sequence[int]) -> PaulingTableau:
    """Build the Pauling tableau of a step vector.

    Each position copies the previous ``(a, b, c)`` and applies the delta of
    its step symbol; position 0 applies its delta to zero.
    """
    text = normalize_stepvec(stepvec)
    n_mo = len(text)
    a = np.zeros(n_mo, dtype=np.int32)
    b = np.zeros(n_mo, dtype=np.int32)
    c = np.zeros(n_mo, dtype=np.int32)
    ai = bi = ci = 0
    n_somo = 0
    for i, s in enumerate(text):
        da, db, dc = STEP_DELTAS[s]
        ai += da
        bi += db
        ci += dc
        a[i] = ai
        b[i] = bi
        c[i] = ci
        if s in ("u", "d"):
            n_somo += 1
    return PaulingTableau(stepvec=text, a=a, b=b, c=c, n_somo=n_somo)
