"""
Capability interfaces for process models.

A process model is conditioned on (elapsed time, prior state, input) and then
maps standard-normal draws to predicted states. The two capabilities are kept
separate; concrete models implement both.
"""
from abc import ABC, abstractmethod


class Conditionable(ABC):
    """Model that can be conditioned on an elapsed time and a prior state."""

    @abstractmethod
    def condition(self, delta_time, state, u=None):
        """
        Condition the model for one prediction step.

        Parameters
        ----------
        delta_time : float
            Elapsed time since the prior state (>= 0)
        state : array_like or float
            Prior state
        u : array_like or float, optional
            Constant forcing term over the interval
        """


class GaussianSampleable(ABC):
    """Model that maps standard-normal noise to a state sample."""

    @property
    @abstractmethod
    def noise_dimension(self):
        """Dimension of the standard-normal draw expected by the map."""

    @abstractmethod
    def map_standard_normal(self, sample):
        """Map a standard-normal draw to a state sample."""

    def sample(self, rng, size=None):
        """Draw from the conditioned model using the given generator."""
        shape = (self.noise_dimension,) if size is None else (size, self.noise_dimension)
        return self.map_standard_normal(rng.standard_normal(shape))
