"""Builder for per-joint linear transition models."""
import logging
import math
import numbers

import numpy as np

from ..config import JointTransitionParameters
from ..ssm import LinearTransitionModel
from .exceptions import (
    InvalidJointSigmaError,
    InvalidNumberOfJointSigmasError,
    JointIndexOutOfBoundsError,
)

logger = logging.getLogger(__name__)


class JointTransitionModelBuilder:
    """
    Builds one scalar random-walk model per joint.

    Each model has identity dynamics and input matrices and an identity noise
    matrix scaled by that joint's sigma, so joints evolve independently.

    Parameters
    ----------
    parameters : JointTransitionParameters
    """

    STATE_DIMENSION = 1
    NOISE_DIMENSION = 1
    INPUT_DIMENSION = 1

    def __init__(self, parameters: JointTransitionParameters):
        self.parameters = parameters

    def _validate(self):
        params = self.parameters
        if len(params.joint_sigmas) != params.joint_count:
            error = InvalidNumberOfJointSigmasError(len(params.joint_sigmas), params.joint_count)
            logger.error("Invalid joint transition configuration: %s", error)
            raise error

    def _check_index(self, joint_index):
        if isinstance(joint_index, bool) or not isinstance(joint_index, numbers.Integral):
            raise TypeError(f"joint_index must be an integer, got {joint_index!r}")
        count = self.parameters.joint_count
        if not 0 <= joint_index < count:
            error = JointIndexOutOfBoundsError(joint_index, count)
            logger.error("Invalid joint transition request: %s", error)
            raise error

    def _sigma(self, joint_index):
        sigma = self.parameters.joint_sigmas[joint_index]
        if not (math.isfinite(sigma) and sigma >= 0.0):
            error = InvalidJointSigmaError(joint_index, sigma)
            logger.error("Invalid joint transition configuration: %s", error)
            raise error
        return float(sigma)

    def _make_model(self, joint_index):
        A = np.eye(self.STATE_DIMENSION)
        B = np.eye(self.STATE_DIMENSION, self.NOISE_DIMENSION) * self._sigma(joint_index)
        C = np.eye(self.STATE_DIMENSION, self.INPUT_DIMENSION)
        return LinearTransitionModel(A, B, C)

    def build(self, joint_index: int) -> LinearTransitionModel:
        """
        Build the transition model of one joint.

        Raises
        ------
        InvalidNumberOfJointSigmasError
            len(joint_sigmas) != joint_count
        JointIndexOutOfBoundsError
            joint_index outside [0, joint_count)
        InvalidJointSigmaError
            The joint's sigma is negative or not finite
        """
        self._validate()
        self._check_index(joint_index)
        model = self._make_model(joint_index)
        logger.debug("Built transition model for joint %d (sigma=%g)",
                     joint_index, model.noise_matrix[0, 0])
        return model

    def build_all(self):
        """Build the models of every joint, or raise without returning any."""
        self._validate()
        models = [self._make_model(j) for j in range(self.parameters.joint_count)]
        logger.debug("Built %d joint transition models", len(models))
        return models
