"""Damped (mean-reverting) Wiener process."""
import logging

import numpy as np

from ..distributions import GaussianStateDistribution
from .interfaces import Conditionable, GaussianSampleable

logger = logging.getLogger(__name__)


class DampedWienerProcess(Conditionable, GaussianSampleable):
    """
    Linear diffusion decaying toward a constant input at rate `damping`.

        dx = (u - damping * x) dt + dW,   Cov[dW] = noise_covariance dt

    Conditioned on the elapsed time dt, a prior state x0 and input u the
    state is Gaussian with

        mean = exp(-damping dt) x0 + (1 - exp(-damping dt)) / damping * u
        cov  = (1 - exp(-2 damping dt)) / (2 damping) * noise_covariance

    When these expressions are not finite (damping -> 0) their limits
    x0 + dt u and dt * noise_covariance are used instead.

    Parameters
    ----------
    damping : float
        Decay rate (>= 0)
    noise_covariance : float or array_like [n_x, n_x]
        Diffusion covariance per unit time. A scalar means noise_covariance * I.
    dimension : int, optional
        State dimension, required only to expand a scalar covariance beyond 1D
    """

    def __init__(self, damping, noise_covariance, dimension=None):
        if not np.isfinite(damping):
            raise ValueError(f"damping must be finite, got {damping}")
        if damping < 0:
            raise ValueError(f"damping must be non-negative, got {damping}")

        noise_covariance = np.array(noise_covariance, dtype=float)
        if noise_covariance.ndim == 0:
            noise_covariance = noise_covariance * np.eye(dimension or 1)
        noise_covariance = np.atleast_2d(noise_covariance)

        n_x = noise_covariance.shape[0]
        if noise_covariance.shape != (n_x, n_x):
            raise ValueError(f"noise_covariance must be square, got {noise_covariance.shape}")
        if dimension is not None and dimension != n_x:
            raise ValueError(f"dimension={dimension} does not match noise_covariance {n_x}x{n_x}")
        # rejects asymmetric or indefinite covariances
        GaussianStateDistribution(np.zeros(n_x), noise_covariance)

        noise_covariance.flags.writeable = False
        self._damping = float(damping)
        self._noise_covariance = noise_covariance
        self._gaussian = None

    @classmethod
    def from_parameters(cls, params, dimension=None):
        """Build from a DampedWienerParameters instance."""
        return cls(params.damping, params.noise_covariance, dimension=dimension)

    @property
    def damping(self):
        return self._damping

    @property
    def noise_covariance(self):
        return self._noise_covariance

    @property
    def dimension(self):
        """State, input and noise dimension (all equal)."""
        return self._noise_covariance.shape[0]

    @property
    def noise_dimension(self):
        return self.dimension

    @property
    def distribution(self):
        """Distribution from the last call to condition(), or None."""
        return self._gaussian

    def _as_vector(self, value, name):
        vector = np.atleast_1d(np.asarray(value, dtype=float))
        if vector.shape != (self.dimension,):
            raise ValueError(f"{name} must have shape ({self.dimension},), got {vector.shape}")
        return vector

    def conditional_mean(self, delta_time, state, u=None):
        """Mean of the state after delta_time."""
        state = self._as_vector(state, 'state')
        u = np.zeros(self.dimension) if u is None else self._as_vector(u, 'u')

        with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
            decay = np.exp(-self._damping * delta_time)
            # -expm1(-x) = 1 - exp(-x), accurate for small damping * dt
            gain = -np.expm1(-self._damping * delta_time) / self._damping
            mean = decay * state + gain * u

        if not np.all(np.isfinite(mean)):
            logger.debug("Damped mean not finite (damping=%g), using limit", self._damping)
            mean = state + delta_time * u
        return mean

    def covariance_factor(self, delta_time):
        """Scalar multiplying noise_covariance after delta_time."""
        with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
            factor = -np.expm1(-2.0 * self._damping * delta_time) / (2.0 * self._damping)
        if not np.isfinite(factor):
            logger.debug("Damped covariance not finite (damping=%g), using limit", self._damping)
            factor = delta_time
        return float(factor)

    def conditional_covariance(self, delta_time):
        """Covariance of the state after delta_time."""
        return self.covariance_factor(delta_time) * self._noise_covariance

    def condition(self, delta_time, state, u=None):
        """
        Condition on (delta_time, state, u).

        Returns
        -------
        GaussianStateDistribution
            The predictive distribution, also cached for map_standard_normal
        """
        if delta_time < 0:
            raise ValueError(f"delta_time must be non-negative, got {delta_time}")

        self._gaussian = GaussianStateDistribution(
            self.conditional_mean(delta_time, state, u),
            self.conditional_covariance(delta_time),
        )
        return self._gaussian

    def map_standard_normal(self, sample):
        """Map standard-normal draw(s) [n_x] or [N, n_x] to predicted state(s)."""
        if self._gaussian is None:
            raise RuntimeError("Call condition() first")
        return self._gaussian.map_standard_normal(sample)
