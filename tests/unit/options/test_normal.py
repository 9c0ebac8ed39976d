import math

import numpy as np
import pytest
from scipy import special, stats

from option_pricing.errors import InvalidArgumentError, MissingRequiredValueError
from option_pricing.options.models.normal import erf, norm, norm_cdf, norm_pdf


@pytest.mark.parametrize("x", np.linspace(-3.5, 3.5, 57))
def test_erf_matches_scipy(x: float):
    assert erf(x) == pytest.approx(special.erf(x), abs=1e-9)


def test_erf_is_odd():
    for x in (0.1, 0.7, 1.9, 3.2):
        assert erf(-x) == -erf(x)


def test_erf_short_circuits():
    assert erf(0.0) == 0.0
    assert erf(3.5000001) == 1.0
    assert erf(10.0) == 1.0
    assert erf(-3.5000001) == -1.0
    assert erf(-10.0) == -1.0


def test_erf_rejects_nan_and_none():
    with pytest.raises(InvalidArgumentError, match="NaN"):
        erf(math.nan)
    with pytest.raises(MissingRequiredValueError):
        erf(None)


@pytest.mark.parametrize("x", [-4.9, -2.0, -0.5365, 0.0, 0.3865, 1.0, 2.5, 4.9])
def test_cdf_and_pdf_match_scipy(x: float):
    assert norm_cdf(x) == pytest.approx(stats.norm.cdf(x), abs=1e-9)
    assert norm_pdf(x) == pytest.approx(stats.norm.pdf(x), rel=1e-12)


def test_cdf_saturates_in_the_tails():
    assert norm.cdf(6.0) == 1.0
    assert norm.cdf(-6.0) == 0.0


def test_cdf_symmetry():
    for x in (0.25, 1.5, 3.0):
        assert norm.cdf(x) + norm.cdf(-x) == pytest.approx(1.0, abs=1e-12)
