from __future__ import annotations


class CSFExpansionError(ValueError):
    """Base class for input errors that abort a CSF expansion."""


class InvalidStepError(CSFExpansionError):
    """A step vector contains a symbol outside ``{0, u, d, 2}``."""

    def __init__(self, symbol: str, position: int | None = None, message: str | None = None) -> None:
        self.symbol = symbol
        self.position = position
        if message is None:
            message = f"invalid step {symbol!r} in step vector"
            if position is not None:
                message += f" at position {int(position)}"
        super().__init__(message)


class InvalidCouplingError(CSFExpansionError):
    """The running spin of a step vector becomes negative (``d`` before its ``u``)."""

    def __init__(self, position: int, twos: int) -> None:
        self.position = int(position)
        self.twos = int(twos)
        super().__init__(
            f"invalid ud ordering in step vector: running 2S = {self.twos} at position {self.position}"
        )


class ImpossibleSpinError(CSFExpansionError):
    """The requested ``2*Ms`` is not reachable from the total spin of the CSF."""

    def __init__(self, twoms: int, twos: int) -> None:
        self.twoms = int(twoms)
        self.twos = int(twos)
        if abs(self.twoms) > self.twos:
            message = (
                f"twoms={self.twoms} exceeds the maximum |2*Ms| of {self.twos} "
                f"for a CSF with 2S={self.twos}"
            )
        else:
            parity = "EVEN" if self.twos % 2 == 0 else "ODD"
            message = f"twoms={self.twoms} must be an {parity} number of half integers for 2S={self.twos}"
        super().__init__(message)


class ExpansionTooLargeError(CSFExpansionError):
    """The number of alpha/beta assignments exceeds the configured cap."""

    def __init__(self, n_combinations: int, limit: int) -> None:
        self.n_combinations = int(n_combinations)
        self.limit = int(limit)
        super().__init__(
            f"expansion would enumerate {self.n_combinations} determinants (max_combinations={self.limit})"
        )
