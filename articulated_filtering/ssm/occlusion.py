"""
Occlusion process models.

OcclusionProcessModel propagates the probability that an image source is
occluded through a two-state Markov chain extended to continuous time.
ContinuousOcclusionProcessModel wraps it with a truncated Gaussian over
[0, 1] and works in logit space, so a Gaussian filter can carry the
occlusion of each source as an unbounded real value.
"""
import logging

import numpy as np

from ..distributions import TruncatedGaussian
from ..utils.link import sigmoid, logit, clamp_probability
from .interfaces import Conditionable, GaussianSampleable

logger = logging.getLogger(__name__)

# |c - 1| below this means the chain never changes state
FROZEN_CHAIN_TOL = 1e-9


def _check_probability(value, name):
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must lie in [0, 1], got {value}")
    return float(value)


class OcclusionProcessModel(Conditionable):
    """
    Binary occlusion chain.

    Per unit of time a visible source becomes occluded with probability
    p_occluded_visible and an occluded one stays occluded with probability
    p_occluded_occluded. With c = p_occluded_occluded - p_occluded_visible
    the occlusion probability after dt is

        p(dt) = p_inf + c**dt * (p0 - p_inf),   p_inf = p_occluded_visible / (1 - c)

    Parameters
    ----------
    p_occluded_visible : float
        P(occluded | visible one time unit earlier)
    p_occluded_occluded : float
        P(occluded | occluded one time unit earlier)
    """

    def __init__(self, p_occluded_visible, p_occluded_occluded):
        self.p_occluded_visible = _check_probability(p_occluded_visible, 'p_occluded_visible')
        self.p_occluded_occluded = _check_probability(p_occluded_occluded, 'p_occluded_occluded')

        self._c = self.p_occluded_occluded - self.p_occluded_visible
        if self._c < 0.0:
            raise ValueError(
                f"p_occluded_occluded={p_occluded_occluded} must not be below "
                f"p_occluded_visible={p_occluded_visible}: an anti-correlated "
                f"chain has no continuous-time extension"
            )

        self._delta_time = 0.0
        self._occlusion_probability = None

    @property
    def stationary_probability(self):
        """Long-run occlusion probability, None when the chain is frozen."""
        if self.is_frozen:
            return None
        return self.p_occluded_visible / (1.0 - self._c)

    @property
    def is_frozen(self):
        return abs(self._c - 1.0) < FROZEN_CHAIN_TOL

    def condition(self, delta_time, state, u=None):
        """Condition on the elapsed time and the prior occlusion probability."""
        if delta_time < 0:
            raise ValueError(f"delta_time must be non-negative, got {delta_time}")
        self._delta_time = float(delta_time)
        self._occlusion_probability = _check_probability(state, 'occlusion probability')

    def predict(self):
        """Predicted occlusion probability after the conditioned interval."""
        if self._occlusion_probability is None:
            raise RuntimeError("Call condition() first")

        p0 = self._occlusion_probability
        if self.is_frozen:
            return p0

        # 0**0 == 1 keeps dt == 0 the identity
        decay = self._c ** self._delta_time
        p_inf = self.stationary_probability
        return float(np.clip(p_inf + decay * (p0 - p_inf), 0.0, 1.0))


class ContinuousOcclusionProcessModel(Conditionable, GaussianSampleable):
    """
    Occlusion process in logit space.

    condition() takes the prior occlusion logit, moves its probability
    through the binary chain and builds a TruncatedGaussian on [0, 1] around
    the predicted probability with standard deviation sigma * sqrt(dt).
    map_standard_normal() draws from it and returns the logit of the draw.

    Parameters
    ----------
    p_occluded_visible, p_occluded_occluded : float
        Transition probabilities of the binary chain
    sigma : float
        Diffusion scale of the occlusion probability per sqrt(time unit)
    """

    def __init__(self, p_occluded_visible, p_occluded_occluded, sigma):
        if not sigma >= 0.0:
            raise ValueError(f"sigma must be non-negative, got {sigma}")
        self._chain = OcclusionProcessModel(p_occluded_visible, p_occluded_occluded)
        self._sigma = float(sigma)
        self._occlusion_probability = None

    @classmethod
    def from_parameters(cls, params):
        """Build from an OcclusionParameters instance."""
        return cls(params.p_occluded_visible, params.p_occluded_occluded, params.sigma)

    @staticmethod
    def initial_logit(initial_occlusion_prob):
        """Logit-space state for an initial occlusion probability."""
        return float(logit(clamp_probability(initial_occlusion_prob)))

    @property
    def sigma(self):
        return self._sigma

    @property
    def chain(self):
        return self._chain

    @property
    def noise_dimension(self):
        return 1

    @property
    def distribution(self):
        """Truncated Gaussian from the last call to condition(), or None."""
        return self._occlusion_probability

    def condition(self, delta_time, state, u=None):
        """
        Condition on the elapsed time and the prior occlusion logit.

        Returns
        -------
        TruncatedGaussian
            Predicted occlusion probability on [0, 1]
        """
        if delta_time < 0:
            raise ValueError(f"delta_time must be non-negative, got {delta_time}")

        initial_probability = float(sigmoid(state))
        self._chain.condition(delta_time, initial_probability)
        mean = self._chain.predict()

        self._occlusion_probability = TruncatedGaussian(
            mean, self._sigma * np.sqrt(delta_time), 0.0, 1.0
        )
        return self._occlusion_probability

    def map_standard_normal(self, sample):
        """Map standard-normal draw(s) to predicted occlusion logit(s)."""
        if self._occlusion_probability is None:
            raise RuntimeError("Call condition() first")
        probability = self._occlusion_probability.map_standard_normal(sample)
        return logit(clamp_probability(probability))
