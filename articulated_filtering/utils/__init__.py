"""
Utility Functions.

This module contains utility functions for:
- Link functions between probabilities and logits
- Consistency metrics for predictive distributions

Plotting helpers are imported from `articulated_filtering.utils.visualization`.
"""
from .link import sigmoid, logit, clamp_probability, PROBABILITY_EPS
from .metrics import sample_moments, compute_nees

__all__ = [
    # link functions
    'sigmoid',
    'logit',
    'clamp_probability',
    'PROBABILITY_EPS',
    # metrics
    'sample_moments',
    'compute_nees',
]
