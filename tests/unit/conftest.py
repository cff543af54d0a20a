"""Shared pytest fixtures for unit tests."""

import numpy as np
import pytest

from articulated_filtering.config import JointTransitionParameters


@pytest.fixture
def joint_parameters():
    """Three joints with distinct noise scales."""
    return JointTransitionParameters(joint_sigma=0.1, joint_sigmas=[0.1, 0.2, 0.3], joint_count=3)


@pytest.fixture
def covariance_2d():
    """Non-diagonal 2D covariance."""
    return np.array([[2.0, 0.6], [0.6, 1.0]])


def check_psd(matrix, tol=1e-10):
    """Check if matrix is positive semi-definite."""
    return np.all(np.linalg.eigvalsh(matrix) >= -tol)
