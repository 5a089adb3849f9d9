"""Exact rational bookkeeping for squared CSF coefficients."""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction


def simplify(nom: int, denom: int) -> tuple[int, int]:
    """Reduce ``nom/denom`` to lowest terms.

    A zero numerator collapses the pair to ``(0, 0)`` whatever the
    denominator is. The sign is carried by the numerator; a negative
    denominator is folded into it.

    Raises
    ------
    ZeroDivisionError
        If ``denom`` is zero and ``nom`` is not.
    """
    nom = int(nom)
    denom = int(denom)
    if nom == 0:
        return 0, 0
    if denom == 0:
        raise ZeroDivisionError(f"zero denominator in {nom}/{denom}")
    if denom < 0:
        nom, denom = -nom, -denom
    div = math.gcd(nom, denom)
    return nom // div, denom // div


def format_ratio(nom: int, denom: int) -> str:
    """Render ``nom/denom``; zero and unit denominators print as a bare integer."""
    if nom == 0 or denom == 1:
        return str(int(nom))
    return f"{int(nom)}/{int(denom)}"


@dataclass(frozen=True)
class Ratio:
    """Signed rational number ``nom/denom``.

    ``Ratio(0, 0)`` is the collapsed zero produced by :func:`simplify`.
    """

    nom: int
    denom: int = 1

    @classmethod
    def of(cls, nom: int, denom: int = 1) -> Ratio:
        """Build an already simplified ratio."""
        return cls(*simplify(nom, denom))

    @property
    def is_zero(self) -> bool:
        return self.nom == 0

    def scaled(self, nom_factor: int, denom_factor: int = 1) -> Ratio:
        """Multiply numerator and denominator by integer factors, then simplify."""
        return Ratio(*simplify(self.nom * int(nom_factor), self.denom * int(denom_factor)))

    def to_fraction(self) -> Fraction:
        if self.nom == 0:
            return Fraction(0)
        return Fraction(self.nom, self.denom)

    def __float__(self) -> float:
        return float(self.to_fraction())

    def __str__(self) -> str:
        return format_ratio(self.nom, self.denom)
