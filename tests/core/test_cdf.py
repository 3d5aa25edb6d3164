import numpy as np
import pytest
from scipy import special, stats

from cbinom import pcbinom, InvalidArgument


# Closed form
# --------------------------------------------------------------------

def test_documented_example_matches_incomplete_beta():
    value = pcbinom(x=4, size=8, prob=0.3)
    assert value.shape == (1,)
    assert 0.0 < value[0] < 1.0
    np.testing.assert_allclose(value[0], 1.0 - special.betainc(4, 5, 0.3), rtol=1e-12)


@pytest.mark.parametrize("k", [1, 2, 3, 5, 8])
def test_integer_points_agree_with_binomial(k):
    # 1 - I_p(k, n - k + 1) = P[Bin(n, p) <= k - 1]
    np.testing.assert_allclose(
        pcbinom(k, size=8, prob=0.3)[0],
        stats.binom.cdf(k - 1, 8, 0.3),
        rtol=1e-10,
    )


def test_cdf_is_monotone_and_bounded(size, prob):
    x = np.linspace(-1.0, size + 2.0, 301)
    F = pcbinom(x, size, prob)
    assert F.shape == x.shape
    assert np.all(F >= 0.0) and np.all(F <= 1.0)
    assert np.all(np.diff(F) >= -1e-12)


def test_saturation_and_below_support(size, prob):
    F = pcbinom([-2.0, 0.0, size + 1.0, size + 1.5, 100.0], size, prob)
    np.testing.assert_array_equal(F, [0.0, 0.0, 1.0, 1.0, 1.0])


def test_saturation_ignores_tail_flag(size, prob):
    F = pcbinom([size + 1.0, size + 3.0], size, prob, lower_tail=False)
    np.testing.assert_array_equal(F, [1.0, 1.0])


def test_survival_at_zero_is_one(size, prob):
    # P[X > 0] = 1 for every parameter pair
    np.testing.assert_array_equal(pcbinom(0.0, size, prob, lower_tail=False), [1.0])
    np.testing.assert_array_equal(pcbinom(0.0, 2.3, 0.9, lower_tail=False), [1.0])
    np.testing.assert_array_equal(pcbinom(0.0, size, prob), [0.0])


def test_upper_tail_complements_lower_tail(support_grid, size, prob):
    lower = pcbinom(support_grid, size, prob, lower_tail=True)
    upper = pcbinom(support_grid, size, prob, lower_tail=False)
    np.testing.assert_allclose(upper, 1.0 - lower, atol=1e-12)


def test_upper_tail_keeps_small_probabilities_accurate():
    upper = pcbinom(0.5, size=60, prob=0.02, lower_tail=False)[0]
    expected = special.betainc(0.5, 60.5, 0.02)
    assert 0.0 < upper
    np.testing.assert_allclose(upper, expected, rtol=1e-10)


def test_nan_input_maps_to_zero(size, prob):
    F = pcbinom([np.nan, 2.0], size, prob)
    assert F[0] == 0.0
    assert 0.0 < F[1] < 1.0


def test_order_and_shape_preserved(prob):
    x = np.array([3.0, 1.0, 2.0])
    F = pcbinom(x, 4, prob)
    assert F[1] < F[2] < F[0]
    assert pcbinom(np.array([[1.0], [2.0]]), 4, prob).shape == (2,)


def test_non_integer_size():
    F = pcbinom([0.5, 1.0, 2.0, 2.7], size=2.7, prob=0.45)
    assert np.all(np.diff(F) > 0)
    assert F[-1] < 1.0
    assert pcbinom(3.7, size=2.7, prob=0.45)[0] == 1.0


# Validation
# --------------------------------------------------------------------

@pytest.mark.parametrize("size", [0, -1.0, np.inf, np.nan])
def test_rejects_bad_size(size):
    with pytest.raises(InvalidArgument):
        pcbinom(1.0, size, 0.5)


@pytest.mark.parametrize("prob", [0.0, 1.0, -0.2, 1.5, np.nan])
def test_rejects_bad_prob(prob):
    with pytest.raises(InvalidArgument, match="prob"):
        pcbinom(1.0, 5, prob)


@pytest.mark.parametrize("x, size, prob", [
    ("a", 5, 0.5),
    (1.0, "5", 0.5),
    (1.0, 5, None),
    (True, 5, 0.5),
    (1.0 + 2j, 5, 0.5),
    (1.0, [5, 6], 0.5),
])
def test_rejects_non_numeric_or_non_scalar(x, size, prob):
    with pytest.raises(InvalidArgument):
        pcbinom(x, size, prob)


def test_invalid_argument_is_a_value_error():
    with pytest.raises(ValueError):
        pcbinom(1.0, -3, 0.5)
