"""Joint configuration of an articulated robot."""
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class RobotJointState:
    """
    Immutable joint position vector with the joint names it refers to.

    Joint names are passed in by whoever owns the kinematics, so states carry
    no reference to a shared kinematic model.
    """
    positions: np.ndarray
    joint_names: tuple

    def __post_init__(self):
        positions = np.array(self.positions, dtype=float).reshape(-1)
        names = tuple(self.joint_names)
        if positions.shape[0] != len(names):
            raise ValueError(
                f"Got {positions.shape[0]} joint positions for {len(names)} joint names"
            )
        if len(set(names)) != len(names):
            raise ValueError("Joint names must be unique")
        positions.flags.writeable = False
        object.__setattr__(self, 'positions', positions)
        object.__setattr__(self, 'joint_names', names)

    @classmethod
    def from_joint_positions(cls, joint_names, joint_positions):
        """Build from a {name: position} mapping ordered by joint_names."""
        missing = [name for name in joint_names if name not in joint_positions]
        if missing:
            raise KeyError(f"No position given for joints: {missing}")
        return cls(np.array([joint_positions[name] for name in joint_names]), joint_names)

    @property
    def joint_count(self):
        return len(self.joint_names)

    def joint_positions(self):
        """Return {joint name: position}."""
        return {name: float(value) for name, value in zip(self.joint_names, self.positions)}

    def with_positions(self, positions):
        """New state with the same joints and different positions."""
        return RobotJointState(positions, self.joint_names)

    @staticmethod
    def zero_input():
        """Zero forcing term for one joint transition model."""
        return np.zeros(1)
