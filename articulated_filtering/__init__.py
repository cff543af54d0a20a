"""Stochastic process models for articulated body tracking."""
from .config import JointTransitionParameters, DampedWienerParameters, OcclusionParameters
from .distributions import GaussianStateDistribution, TruncatedGaussian
from .ssm import (
    Conditionable,
    GaussianSampleable,
    DampedWienerProcess,
    OcclusionProcessModel,
    ContinuousOcclusionProcessModel,
    LinearTransitionModel,
    RobotJointState,
)
from .builders import (
    JointTransitionModelBuilder,
    TransitionModelConfigurationError,
    InvalidNumberOfJointSigmasError,
    JointIndexOutOfBoundsError,
    InvalidJointSigmaError,
)

__version__ = '0.1.0'

__all__ = [
    # config
    'JointTransitionParameters',
    'DampedWienerParameters',
    'OcclusionParameters',
    # distributions
    'GaussianStateDistribution',
    'TruncatedGaussian',
    # process models
    'Conditionable',
    'GaussianSampleable',
    'DampedWienerProcess',
    'OcclusionProcessModel',
    'ContinuousOcclusionProcessModel',
    'LinearTransitionModel',
    'RobotJointState',
    # builders
    'JointTransitionModelBuilder',
    'TransitionModelConfigurationError',
    'InvalidNumberOfJointSigmasError',
    'JointIndexOutOfBoundsError',
    'InvalidJointSigmaError',
]
