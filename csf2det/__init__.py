"""csf2det: expand genealogical CSFs into Slater determinants."""

from importlib.metadata import PackageNotFoundError, version as _dist_version

from csf2det.combinations import Combination, count_spin_couplings, iter_combinations
from csf2det.errors import (
    CSFExpansionError,
    ExpansionTooLargeError,
    ImpossibleSpinError,
    InvalidCouplingError,
    InvalidStepError,
)
from csf2det.expand import CSFExpansion, Determinant, expand_csf, expansion_matrix, iter_determinants
from csf2det.fraction import Ratio, format_ratio, simplify
from csf2det.record import expansion_snapshot, iter_spin_couplings, iter_step_vectors
from csf2det.tableau import STEP_ORDER, PaulingTableau, build_tableau, normalize_stepvec

try:
    __version__ = _dist_version("csf2det")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0"

__all__ = [
    "__version__",
    # Core types
    "CSFExpansion",
    "Combination",
    "Determinant",
    "PaulingTableau",
    "Ratio",
    "STEP_ORDER",
    # Core functions
    "build_tableau",
    "expand_csf",
    "expansion_matrix",
    "format_ratio",
    "iter_combinations",
    "iter_determinants",
    "normalize_stepvec",
    "simplify",
    # CSF records
    "count_spin_couplings",
    "expansion_snapshot",
    "iter_spin_couplings",
    "iter_step_vectors",
    # Errors
    "CSFExpansionError",
    "ExpansionTooLargeError",
    "ImpossibleSpinError",
    "InvalidCouplingError",
    "InvalidStepError",
]
