"""Process (state transition) models."""
from .interfaces import Conditionable, GaussianSampleable
from .damped_wiener import DampedWienerProcess
from .occlusion import OcclusionProcessModel, ContinuousOcclusionProcessModel
from .linear_transition import LinearTransitionModel
from .robot_state import RobotJointState

__all__ = [
    'Conditionable',
    'GaussianSampleable',
    'DampedWienerProcess',
    'OcclusionProcessModel',
    'ContinuousOcclusionProcessModel',
    'LinearTransitionModel',
    'RobotJointState',
]
