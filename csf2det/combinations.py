from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator


@dataclass(eq=False)
class Combination:
    """Lexicographic ``k``-subset of ``{0, ..., n-1}``, advanced in place.

    Attributes
    ----------
    n : int
        Size of the index set.
    k : int
        Size of the subset.
    lex : list of int
        Current subset as a strictly increasing index list. Initialised to
        ``[0, 1, ..., k-1]``.
    """

    n: int
    k: int
    lex: list[int] = field(init=False)

    def __post_init__(self) -> None:
        self.n = int(self.n)
        self.k = int(self.k)
        if self.n < 0:
            raise ValueError("n must be >= 0")
        if self.k < 0:
            raise ValueError("k must be >= 0")
        if self.k > self.n:
            raise ValueError(f"k must be <= n (k={self.k}, n={self.n})")
        self.lex = list(range(self.k))

    def advance(self) -> bool:
        """Step to the next subset in lexicographic order.

        Returns
        -------
        bool
            ``False`` once the last subset has been reached; the buffer is
            then left unchanged.
        """
        n, k, lex = self.n, self.k, self.lex
        ptr = k - 1
        while ptr >= 0 and lex[ptr] == n - k + ptr:
            ptr -= 1
        if ptr < 0:
            return False
        lex[ptr] += 1
        for i in range(1, k - ptr):
            lex[ptr + i] = lex[ptr] + i
        return True

    def as_tuple(self) -> tuple[int, ...]:
        return tuple(self.lex)


def iter_combinations(n: int, k: int) -> Iterator[tuple[int, ...]]:
    """Yield all ``k``-subsets of ``range(n)`` in lexicographic order.

    The first subset is always yielded, so ``k = 0`` produces a single empty
    tuple and the total count is ``math.comb(n, k)``.
    """
    comb = Combination(n, k)
    yield comb.as_tuple()
    while comb.advance():
        yield comb.as_tuple()


def validate_spin_coupling(nspin: int, twos: int) -> None:
    if nspin < 0:
        raise ValueError("nspin must be >= 0")
    if twos < 0:
        raise ValueError("twos must be >= 0")
    if (nspin - twos) % 2 != 0:
        raise ValueError("nspin and twos must have the same parity")


def count_spin_couplings(nspin: int, twos: int) -> int:
    """Number of genealogical spin couplings of *nspin* open shells to total spin *twos*.

    A coupling is a ``u``/``d`` path whose running 2S never drops below zero,
    so the count is the ballot number ``C(n, n_d) - C(n, n_d - 1)`` with
    ``n_d = (nspin - twos) / 2`` down steps.
    """
    nspin = int(nspin)
    twos = int(twos)
    validate_spin_coupling(nspin, twos)
    if twos > nspin:
        return 0
    n_down = (nspin - twos) // 2
    if n_down == 0:
        return 1
    return math.comb(nspin, n_down) - math.comb(nspin, n_down - 1)
