"""Builders that assemble process models from configuration."""
from .joint_transition import JointTransitionModelBuilder
from .exceptions import (
    TransitionModelConfigurationError,
    InvalidNumberOfJointSigmasError,
    JointIndexOutOfBoundsError,
    InvalidJointSigmaError,
)

__all__ = [
    'JointTransitionModelBuilder',
    'TransitionModelConfigurationError',
    'InvalidNumberOfJointSigmasError',
    'JointIndexOutOfBoundsError',
    'InvalidJointSigmaError',
]
