import unittest
import numpy as np

from cbinom import ContinuousBinomial, Distribution, FitSettings, InvalidArgument, NumericalSettings
from cbinom import dcbinom, pcbinom


class _FixedSampler(Distribution[np.floating]):
    """Replays a fixed set of draws; only ``sample`` is implemented."""

    def __init__(self, draws):
        self._draws = np.asarray(draws, dtype=float).reshape(-1, 1)

    def sample(self, n_samples):
        return self._draws[:n_samples]

    @classmethod
    def from_distribution(cls, convert_from, **kwargs):
        return cls(convert_from.sample(kwargs.get("num_samples", 16)))


class TestContinuousBinomial(unittest.TestCase):

    def setUp(self):
        self.size = 6.0
        self.prob = 0.35
        # fix RNG for reproducibility
        self.dist = ContinuousBinomial(size=self.size,
                                       prob=self.prob,
                                       rng=np.random.default_rng(123))

    def test_parameters_and_support(self):
        self.assertEqual(self.dist.size, 6.0)
        self.assertEqual(self.dist.prob, 0.35)
        self.assertEqual(self.dist.support, (0.0, 7.0))
        self.assertIsNone(self.dist.fit_result)
        self.assertIn("ContinuousBinomial", repr(self.dist))

    def test_invalid_parameters(self):
        for size, prob in [(0.0, 0.5), (-2.0, 0.5), (3.0, 0.0), (3.0, 1.0), ("3", 0.5)]:
            with self.assertRaises(InvalidArgument):
                ContinuousBinomial(size, prob)

    def test_sample_shape(self):
        # single sample → shape (1,1)
        x1 = self.dist.sample(1)
        self.assertIsInstance(x1, np.ndarray)
        self.assertEqual(x1.shape, (1, 1))

        # multiple samples → shape (n,1)
        x10 = self.dist.sample(10)
        self.assertEqual(x10.shape, (10, 1))
        self.assertTrue(np.all((x10 >= 0.0) & (x10 <= 7.0)))

    def test_sample_rejects_bad_count(self):
        for n in (-1, 0, 2.5, "3"):
            with self.assertRaises(InvalidArgument):
                self.dist.sample(n)

    def test_sample_allows_small_size(self):
        dist = ContinuousBinomial(0.4, 0.5, rng=np.random.default_rng(1))
        x = dist.sample(5)
        self.assertTrue(np.all((x >= 0.0) & (x <= 1.4)))

    def test_density_log_density_cdf_sf_shapes(self):
        scalar = 2.0
        arr1d = np.linspace(0.5, 6.5, 4)       # shape (4,)
        arr2d = arr1d.reshape(4, 1)            # shape (4,1)

        for fn in (self.dist.density, self.dist.log_density, self.dist.cdf, self.dist.sf):
            self.assertEqual(fn(scalar).shape, (1, 1))
            self.assertEqual(fn(arr1d).shape, (4, 1))
            self.assertEqual(fn(arr2d).shape, (4, 1))

    def test_matches_functional_api(self):
        x = np.array([0.5, 2.0, 4.5])
        np.testing.assert_allclose(self.dist.cdf(x).ravel(), pcbinom(x, self.size, self.prob))
        np.testing.assert_allclose(self.dist.density(x).ravel(), dcbinom(x, self.size, self.prob))
        np.testing.assert_allclose(self.dist.sf(x).ravel(),
                                   pcbinom(x, self.size, self.prob, lower_tail=False))

    def test_log_density_consistency(self):
        x = np.array([1.0, 3.0, 8.0])
        pdf = self.dist.density(x).ravel()
        logpdf = self.dist.log_density(x).ravel()
        np.testing.assert_allclose(logpdf[:2], np.log(pdf[:2]), rtol=1e-7)
        self.assertEqual(logpdf[2], -np.inf)

    def test_inv_cdf(self):
        u = np.array([0.1, 0.5, 0.9])
        q = self.dist.inv_cdf(u)
        self.assertEqual(q.shape, (3, 1))
        np.testing.assert_allclose(self.dist.cdf(q).ravel(), u, atol=1e-6)

        with self.assertRaises(InvalidArgument):
            self.dist.inv_cdf(1.0)

    def test_mean_cov(self):
        m = self.dist.mean()
        C = self.dist.cov()

        # mean should be (1,), cov should be (1,1)
        self.assertEqual(m.shape, (1,))
        self.assertEqual(C.shape, (1, 1))
        self.assertTrue(0.0 < m[0] < 7.0)
        self.assertGreater(C[0, 0], 0.0)
        np.testing.assert_allclose(self.dist.var(), np.diag(C))

    def test_from_data_keeps_fit_result(self):
        data = np.array([1.2, 2.5, 3.1, 0.7, 4.0, 2.2, 1.9, 2.8])
        settings = NumericalSettings(fit=FitSettings(maxiter=1))
        dist = ContinuousBinomial.from_data(data, strict=False, settings=settings)
        self.assertIsNotNone(dist.fit_result)
        self.assertFalse(dist.fit_result.converged)
        self.assertEqual(dist.prob, dist.fit_result.prob_hat)
        self.assertEqual(dist.size, dist.fit_result.size_hat)

    def test_from_distribution_draws_from_source(self):
        source = _FixedSampler([1.2, 2.5, 3.1, 0.7, 4.0, 2.2, 1.9, 2.8])
        settings = NumericalSettings(fit=FitSettings(maxiter=1))
        dist = ContinuousBinomial.from_distribution(source, num_samples=8, strict=False, settings=settings)
        self.assertIsInstance(dist, ContinuousBinomial)
        self.assertEqual(dist.fit_result.n_samples, 8)


if __name__ == "__main__":
    unittest.main()
