"""Expansion of a genealogical CSF into Slater determinants.

Each alpha/beta assignment of the singly occupied orbitals is one candidate
determinant. Its squared coefficient is the product of the genealogical
coupling factors along the step vector, accumulated as an exact fraction.
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Iterable, Iterator, Sequence

import numpy as np

from csf2det import config
from csf2det.combinations import count_spin_couplings, iter_combinations
from csf2det.errors import ExpansionTooLargeError, ImpossibleSpinError
from csf2det.fraction import Ratio
from csf2det.tableau import PaulingTableau, build_tableau


@dataclass(frozen=True)
class Determinant:
    """One Slater determinant of a CSF expansion.

    Attributes
    ----------
    string : str
        Occupation per orbital, ``0``, ``a``, ``b`` or ``2``.
    phase : int
        Sign of the expansion coefficient, ``+1`` or ``-1``.
    weight : Ratio
        Squared expansion coefficient in lowest terms (never zero).
    """

    string: str
    phase: int
    weight: Ratio

    @property
    def sign(self) -> str:
        return "+" if self.phase > 0 else "-"

    @property
    def coefficient(self) -> Fraction:
        """Signed squared coefficient, ``phase * C**2``."""
        return self.phase * self.weight.to_fraction()

    @property
    def amplitude(self) -> float:
        """Expansion coefficient ``phase * sqrt(C**2)``."""
        return float(self.phase) * math.sqrt(float(self.weight))

    def alpha_occ(self) -> np.ndarray:
        return np.fromiter((s in ("a", "2") for s in self.string), dtype=np.int8, count=len(self.string))

    def beta_occ(self) -> np.ndarray:
        return np.fromiter((s in ("b", "2") for s in self.string), dtype=np.int8, count=len(self.string))

    def __str__(self) -> str:
        return f"{self.sign} {self.weight} |{self.string}|"


@dataclass(frozen=True, eq=False)
class CSFExpansion:
    """Result of expanding one CSF at a fixed ``2*Ms``."""

    tableau: PaulingTableau
    twoms: int
    n_alpha: int
    n_combinations: int
    determinants: tuple[Determinant, ...]

    @property
    def stepvec(self) -> str:
        return self.tableau.stepvec

    @property
    def n_e(self) -> int:
        return self.tableau.n_e

    @property
    def n_mo(self) -> int:
        return self.tableau.n_mo

    @property
    def twos(self) -> int:
        return self.tableau.twos

    @property
    def ms(self) -> Ratio:
        """Spin projection ``twoms/2`` in lowest terms."""
        return Ratio.of(self.twoms, 2)

    @property
    def n_forbidden(self) -> int:
        """Assignments whose coupling coefficient vanishes."""
        return int(self.n_combinations) - len(self.determinants)

    def __len__(self) -> int:
        return len(self.determinants)

    def __iter__(self) -> Iterator[Determinant]:
        return iter(self.determinants)

    def norm(self) -> Fraction:
        """Exact sum of squared coefficients; 1 for a normalised CSF."""
        return sum((d.weight.to_fraction() for d in self.determinants), Fraction(0))

    def amplitudes(self) -> np.ndarray:
        return np.array([d.amplitude for d in self.determinants], dtype=np.float64)

    def header_lines(self) -> list[str]:
        return [
            f"CSF: {self.stepvec}, Ms: {self.ms}",
            f"Determinants for {self.n_e} electrons in {self.n_mo} orbitals:",
        ]

    def lines(self) -> list[str]:
        """Echo line, header line, then one line per determinant."""
        return self.header_lines() + [str(d) for d in self.determinants]


def _check_spin(tableau: PaulingTableau, twoms: int) -> int:
    """Validate ``twoms`` against the CSF and return the number of alpha SOMOs."""
    tableau.check_coupling()
    twos = tableau.twos
    if abs(twoms) > twos or (twos + twoms) % 2 != 0:
        raise ImpossibleSpinError(twoms, twos)
    return (tableau.n_somo + twoms) // 2


def _walk(tableau: PaulingTableau, spin_eigv: np.ndarray) -> tuple[str, int, Ratio]:
    """Build one determinant string with its phase and squared coefficient."""
    a = tableau.a
    b = tableau.b
    phase = 1
    weight = Ratio(1, 1)
    i_somo = i_alpha = i_beta = 0
    det: list[str] = []
    for i, step in enumerate(tableau.stepvec):
        ai = int(a[i])
        bi = int(b[i])
        if step == "0":
            det.append("0")
        elif step == "u":
            if spin_eigv[i_somo] > 0:
                det.append("a")
                nom = ai + bi - i_beta
                i_alpha += 1
            else:
                det.append("b")
                nom = ai + bi - i_alpha
                i_beta += 1
            weight = weight.scaled(nom, bi)
            i_somo += 1
        elif step == "d":
            if spin_eigv[i_somo] > 0:
                det.append("a")
                nom = i_beta - ai + 1
                i_alpha += 1
                if bi % 2 == 0:
                    phase = -phase
            else:
                det.append("b")
                nom = i_alpha - ai + 1
                i_beta += 1
                if bi % 2 != 0:
                    phase = -phase
            weight = weight.scaled(nom, bi + 2)
            i_somo += 1
        else:
            det.append("2")
            if bi % 2 != 0:
                phase = -phase
            i_alpha += 1
            i_beta += 1
    return "".join(det), phase, weight


def _iter_walks(tableau: PaulingTableau, n_alpha: int) -> Iterator[tuple[tuple[int, ...], str, int, Ratio]]:
    n_somo = int(tableau.n_somo)
    for comb in iter_combinations(n_somo, n_alpha):
        spin_eigv = np.full(n_somo, -1, dtype=np.int8)
        if comb:
            spin_eigv[list(comb)] = 1
        string, phase, weight = _walk(tableau, spin_eigv)
        yield comb, string, phase, weight


def iter_determinants(tableau: PaulingTableau, twoms: int) -> Iterator[Determinant]:
    """Lazily yield the nonzero determinants of a CSF.

    Determinants come out in lexicographic order of the alpha-spin SOMO
    subsets. Input errors are raised before the first determinant.
    """
    n_alpha = _check_spin(tableau, int(twoms))
    for _comb, string, phase, weight in _iter_walks(tableau, n_alpha):
        if not weight.is_zero:
            yield Determinant(string=string, phase=phase, weight=weight)


def expand_csf(
    stepvec: str | Sequence[int],
    twoms: int,
    *,
    verbose: int = 0,
    stdout: Any = None,
    max_combinations: int | None = None,
) -> CSFExpansion:
    """Expand a CSF into Slater determinants.

    Parameters
    ----------
    stepvec : str or sequence of int
        Step vector over ``{0, u, d, 2}`` (blanks ignored) or step indices
        ``0..3``.
    twoms : int
        Twice the spin projection, ``2*Ms``.
    verbose : int, optional
        ``>= 1`` prints the tableau and counts, ``>= 2`` also prints every
        alpha/beta assignment including the forbidden ones.
    stdout : file-like, optional
        Stream for diagnostics. Defaults to ``sys.stdout``.
    max_combinations : int or None, optional
        Refuse to enumerate more assignments than this; 0 disables the
        cap. Defaults to ``CSF2DET_MAX_COMBINATIONS``.

    Returns
    -------
    CSFExpansion

    Raises
    ------
    InvalidStepError, InvalidCouplingError, ImpossibleSpinError, ExpansionTooLargeError
        Before any determinant is built.
    """
    out = sys.stdout if stdout is None else stdout
    verbose = int(verbose)
    twoms = int(twoms)
    if max_combinations is None:
        max_combinations = config.default_max_combinations()

    tableau = build_tableau(stepvec)
    n_alpha = _check_spin(tableau, twoms)
    n_comb = math.comb(int(tableau.n_somo), n_alpha)
    if max_combinations is not None and int(max_combinations) > 0 and n_comb > int(max_combinations):
        raise ExpansionTooLargeError(n_comb, int(max_combinations))

    if verbose >= 1:
        print(f"step vector = {tableau.stepvec}", file=out)
        print(f"a = {tableau.a.tolist()}", file=out)
        print(f"b = {tableau.b.tolist()}", file=out)
        print(f"c = {tableau.c.tolist()}", file=out)
        print(
            f"n_e = {tableau.n_e}  n_mo = {tableau.n_mo}  n_somo = {tableau.n_somo}  "
            f"2S = {tableau.twos}  2Ms = {twoms}  n_alpha = {n_alpha}",
            file=out,
        )
        print(f"alpha/beta assignments = {n_comb}", file=out)
        print(
            f"spin couplings of {tableau.n_somo} open shells to 2S = {tableau.twos}: "
            f"{count_spin_couplings(tableau.n_somo, tableau.twos)}",
            file=out,
        )
        print("output = phase * C^2 * SD", file=out)

    dets: list[Determinant] = []
    for comb, string, phase, weight in _iter_walks(tableau, n_alpha):
        if weight.is_zero:
            if verbose >= 2:
                print(f"  alpha SOMOs {list(comb)}: |{string}| forbidden", file=out)
            continue
        det = Determinant(string=string, phase=phase, weight=weight)
        if verbose >= 2:
            print(f"  alpha SOMOs {list(comb)}: {det}", file=out)
        dets.append(det)

    result = CSFExpansion(
        tableau=tableau,
        twoms=twoms,
        n_alpha=n_alpha,
        n_combinations=n_comb,
        determinants=tuple(dets),
    )
    if verbose >= 1:
        print(f"{len(result)} determinants, {result.n_forbidden} forbidden", file=out)
    return result


def expansion_matrix(stepvecs: Iterable[str | Sequence[int]], twoms: int) -> tuple[list[str], np.ndarray]:
    """CSF-to-determinant transformation for several CSFs at one ``2*Ms``.

    Returns
    -------
    dets : list of str
        Determinant strings in first-seen order.
    mat : np.ndarray
        float64 array of shape ``(ncsf, ndet)``; row ``i`` holds the
        amplitudes of CSF ``i``.
    """
    expansions = [expand_csf(sv, twoms, max_combinations=0) for sv in stepvecs]
    index: dict[str, int] = {}
    for exp in expansions:
        for det in exp.determinants:
            index.setdefault(det.string, len(index))
    mat = np.zeros((len(expansions), len(index)), dtype=np.float64)
    for row, exp in enumerate(expansions):
        for det in exp.determinants:
            mat[row, index[det.string]] = det.amplitude
    return list(index), mat
