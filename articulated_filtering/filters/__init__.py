"""Filter time-update helpers built on the process models."""
from .prediction import (
    predict_joint_particles,
    predict_damped_particles,
    predict_occlusions,
    kalman_predict,
)

__all__ = [
    'predict_joint_particles',
    'predict_damped_particles',
    'predict_occlusions',
    'kalman_predict',
]
