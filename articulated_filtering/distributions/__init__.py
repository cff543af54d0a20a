"""Probability distributions used by the process models."""
from .gaussian import GaussianStateDistribution
from .truncated_gaussian import TruncatedGaussian

__all__ = [
    'GaussianStateDistribution',
    'TruncatedGaussian',
]
