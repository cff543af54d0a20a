"""Unit tests for the occlusion process models."""

import numpy as np
import pytest

from articulated_filtering.config import OcclusionParameters
from articulated_filtering.distributions import TruncatedGaussian
from articulated_filtering.ssm import OcclusionProcessModel, ContinuousOcclusionProcessModel
from articulated_filtering.utils.link import sigmoid, logit


def step_chain(p, p_ov, p_oo, steps):
    """Apply the discrete two-state chain `steps` times."""
    for _ in range(steps):
        p = p_ov * (1.0 - p) + p_oo * p
    return p


class TestOcclusionProcessModel:
    """Tests for the binary occlusion chain."""

    @pytest.mark.parametrize("steps", [1, 2, 5])
    def test_integer_steps_match_discrete_chain(self, steps):
        model = OcclusionProcessModel(0.1, 0.7)

        model.condition(float(steps), 0.3)

        np.testing.assert_allclose(model.predict(), step_chain(0.3, 0.1, 0.7, steps), rtol=1e-12)

    def test_zero_dt_is_identity(self):
        model = OcclusionProcessModel(0.2, 0.6)

        model.condition(0.0, 0.45)

        np.testing.assert_allclose(model.predict(), 0.45)

    def test_converges_to_stationary(self):
        model = OcclusionProcessModel(0.1, 0.7)

        model.condition(200.0, 0.9)

        np.testing.assert_allclose(model.predict(), 0.1 / (1 - 0.6), rtol=1e-10)
        np.testing.assert_allclose(model.stationary_probability, 0.25)

    def test_stationary_is_fixed_point(self):
        model = OcclusionProcessModel(0.05, 0.8)
        p_inf = model.stationary_probability

        model.condition(0.37, p_inf)

        np.testing.assert_allclose(model.predict(), p_inf, rtol=1e-12)

    def test_frozen_chain(self):
        """p_oo = 1 and p_ov = 0: nothing ever changes."""
        model = OcclusionProcessModel(0.0, 1.0)

        model.condition(3.0, 0.37)

        assert model.is_frozen
        assert model.stationary_probability is None
        assert model.predict() == 0.37

    def test_memoryless_chain(self):
        """p_oo == p_ov: one time unit forgets the prior."""
        model = OcclusionProcessModel(0.3, 0.3)

        model.condition(1.0, 0.9)

        np.testing.assert_allclose(model.predict(), 0.3)

    def test_fractional_steps_compose(self):
        """Two half steps equal one full step."""
        model = OcclusionProcessModel(0.1, 0.7)
        model.condition(0.5, 0.2)
        half = model.predict()
        model.condition(0.5, half)
        two_halves = model.predict()

        model.condition(1.0, 0.2)

        np.testing.assert_allclose(two_halves, model.predict(), rtol=1e-12)

    @pytest.mark.parametrize("p_ov,p_oo", [(-0.1, 0.5), (0.5, 1.2)])
    def test_invalid_probabilities_raise(self, p_ov, p_oo):
        with pytest.raises(ValueError, match="must lie in"):
            OcclusionProcessModel(p_ov, p_oo)

    def test_anti_correlated_chain_raises(self):
        with pytest.raises(ValueError, match="anti-correlated"):
            OcclusionProcessModel(0.8, 0.2)

    def test_predict_before_condition_raises(self):
        with pytest.raises(RuntimeError):
            OcclusionProcessModel(0.1, 0.7).predict()


class TestContinuousOcclusionProcessModel:
    """Tests for the logit-space occlusion model."""

    def test_condition_builds_truncated_gaussian(self):
        model = ContinuousOcclusionProcessModel(0.1, 0.7, sigma=0.2)
        prior_logit = logit(0.3)

        dist = model.condition(0.25, prior_logit)

        chain = OcclusionProcessModel(0.1, 0.7)
        chain.condition(0.25, 0.3)
        assert isinstance(dist, TruncatedGaussian)
        assert dist.bounds == (0.0, 1.0)
        np.testing.assert_allclose(dist.mean, chain.predict())
        np.testing.assert_allclose(dist.sigma, 0.2 * np.sqrt(0.25))

    def test_zero_noise_maps_near_median(self):
        """Zero draw maps to the median, close to the mean for a narrow Gaussian."""
        model = ContinuousOcclusionProcessModel(0.1, 0.7, sigma=0.01)
        dist = model.condition(0.1, logit(0.5))

        np.testing.assert_allclose(sigmoid(model.map_standard_normal(0.0)), dist.mean, atol=1e-6)

    @pytest.mark.parametrize("prior", [-30.0, -5.0, 0.0, 2.0, 30.0])
    @pytest.mark.parametrize("dt", [0.0, 0.03, 1.0, 10.0])
    def test_output_is_finite_probability(self, rng, prior, dt):
        model = ContinuousOcclusionProcessModel(0.1, 0.7, sigma=0.5)
        model.condition(dt, prior)
        z = np.concatenate([rng.standard_normal(2000), [-40.0, 40.0]])

        out = model.map_standard_normal(z)
        p = sigmoid(out)

        assert np.all(np.isfinite(out))
        assert np.all(p > 0.0) and np.all(p < 1.0)

    def test_zero_dt_returns_prior(self):
        """Without elapsed time there is no diffusion and no transition."""
        model = ContinuousOcclusionProcessModel(0.1, 0.7, sigma=0.5)
        model.condition(0.0, 1.2)

        np.testing.assert_allclose(model.map_standard_normal(1.5), 1.2, rtol=1e-9)

    def test_spread_grows_with_dt(self, rng):
        model = ContinuousOcclusionProcessModel(0.0, 1.0, sigma=0.2)
        z = rng.standard_normal(5000)

        model.condition(0.01, 0.0)
        short = sigmoid(model.map_standard_normal(z))
        model.condition(1.0, 0.0)
        long = sigmoid(model.map_standard_normal(z))

        assert np.std(long) > 5 * np.std(short)

    def test_map_before_condition_raises(self):
        model = ContinuousOcclusionProcessModel(0.1, 0.7, sigma=0.2)

        with pytest.raises(RuntimeError, match="condition"):
            model.map_standard_normal(0.0)

    def test_negative_sigma_raises(self):
        with pytest.raises(ValueError, match="sigma"):
            ContinuousOcclusionProcessModel(0.1, 0.7, sigma=-1.0)

    def test_from_parameters(self):
        params = OcclusionParameters(p_occluded_visible=0.2, p_occluded_occluded=0.9, sigma=0.3)

        model = ContinuousOcclusionProcessModel.from_parameters(params)

        assert model.sigma == 0.3
        assert model.chain.p_occluded_visible == 0.2
        assert model.chain.p_occluded_occluded == 0.9

    def test_initial_logit(self):
        np.testing.assert_allclose(ContinuousOcclusionProcessModel.initial_logit(0.5), 0.0)
        assert np.isfinite(ContinuousOcclusionProcessModel.initial_logit(0.0))
        assert np.isfinite(ContinuousOcclusionProcessModel.initial_logit(1.0))


class TestLinkFunctions:
    """Round trip of the logit/sigmoid pair."""

    def test_round_trip(self):
        x = np.linspace(-20.0, 20.0, 401)

        np.testing.assert_allclose(logit(sigmoid(x)), x, atol=1e-6)

    def test_sigmoid_range(self):
        p = sigmoid(np.array([-700.0, -10.0, 0.0, 10.0, 700.0]))

        assert np.all(p >= 0.0) and np.all(p <= 1.0)
        np.testing.assert_allclose(p[2], 0.5)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
