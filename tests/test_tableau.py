from __future__ import annotations

import itertools

import numpy as np
import pytest

from csf2det.errors import InvalidCouplingError, InvalidStepError
from csf2det.tableau import build_tableau, normalize_stepvec, path_as_stepvec


def test_tableau_cumulative_numbers():
    tab = build_tableau("2ud0u")
    assert tab.a.tolist() == [1, 1, 2, 2, 2]
    assert tab.b.tolist() == [0, 1, 0, 0, 1]
    assert tab.c.tolist() == [0, 0, 1, 2, 2]
    assert tab.a.dtype == np.int32
    assert tab.n_mo == 5
    assert tab.n_somo == 3
    assert tab.n_domo == 1
    assert tab.n_e == 5
    assert tab.twos == 1
    assert tab.occupations().tolist() == [2, 1, 1, 0, 1]


def test_first_position_applies_its_own_delta():
    assert build_tableau("0").c.tolist() == [1]
    assert build_tableau("u").b.tolist() == [1]
    tab = build_tableau("d")
    assert (int(tab.a[0]), int(tab.b[0]), int(tab.c[0])) == (1, -1, 1)
    assert build_tableau("2").a.tolist() == [1]


def test_electron_count_independent_of_coupling():
    for n in range(1, 5):
        for steps in itertools.product("0ud2", repeat=n):
            sv = "".join(steps)
            tab = build_tableau(sv)
            expected = 2 * sv.count("2") + sv.count("u") + sv.count("d")
            assert tab.n_e == expected
            assert 2 * int(tab.a[-1]) + int(tab.b[-1]) == expected


def test_blanks_are_ignored():
    assert normalize_stepvec("2udu u0") == "2uduu0"
    assert build_tableau("2u d").stepvec == "2ud"


def test_step_indices_map_to_symbols():
    assert path_as_stepvec([3, 1, 2, 0]) == "2ud0"
    assert build_tableau(np.array([1, 2], dtype=np.int8)).stepvec == "ud"


def test_invalid_symbol_reports_character():
    with pytest.raises(InvalidStepError) as exc:
        build_tableau("2ux")
    assert exc.value.symbol == "x"
    assert exc.value.position == 2
    assert "'x'" in str(exc.value)


def test_invalid_step_index():
    with pytest.raises(InvalidStepError):
        normalize_stepvec([0, 4])


def test_non_integral_step_index_rejected():
    with pytest.raises(InvalidStepError) as exc:
        normalize_stepvec([1.7, 2.2])
    assert exc.value.position == 0
    with pytest.raises(InvalidStepError):
        build_tableau(np.array([1.0, 2.5]))
    assert path_as_stepvec([1.0, 2.0]) == "ud"


@pytest.mark.parametrize("sv", ["", "   "])
def test_empty_stepvec(sv):
    with pytest.raises(InvalidStepError):
        build_tableau(sv)


def test_invalid_ud_ordering():
    tab = build_tableau("du")
    with pytest.raises(InvalidCouplingError) as exc:
        tab.check_coupling()
    assert exc.value.position == 0
    build_tableau("ud").check_coupling()
