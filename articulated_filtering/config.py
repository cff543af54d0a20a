"""Parameter structs for the process models, filled by an external source."""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class JointTransitionParameters:
    """Per-joint noise scales for the joint transition models."""
    joint_sigma: float = 0.1
    joint_sigmas: List[float] = field(default_factory=list)
    joint_count: int = 0

    @classmethod
    def uniform(cls, joint_count: int, joint_sigma: float = 0.1) -> 'JointTransitionParameters':
        """Same noise scale for every joint."""
        return cls(joint_sigma=joint_sigma,
                   joint_sigmas=[joint_sigma] * joint_count,
                   joint_count=joint_count)

    @classmethod
    def from_dict(cls, params: dict) -> 'JointTransitionParameters':
        """
        Build from a plain mapping.

        A missing `joint_sigmas` expands `joint_sigma` to every joint. No
        consistency check happens here; the builder rejects bad parameters.
        """
        joint_sigma = float(params.get('joint_sigma', cls.joint_sigma))
        joint_count = int(params['joint_count'])
        joint_sigmas = params.get('joint_sigmas')
        if joint_sigmas is None:
            joint_sigmas = [joint_sigma] * joint_count
        return cls(joint_sigma=joint_sigma,
                   joint_sigmas=[float(s) for s in joint_sigmas],
                   joint_count=joint_count)


@dataclass
class DampedWienerParameters:
    """Damping rate and diffusion covariance of a damped Wiener process."""
    damping: float = 1.0
    noise_covariance: float = 1.0

    @classmethod
    def from_dict(cls, params: dict) -> 'DampedWienerParameters':
        return cls(damping=float(params['damping']),
                   noise_covariance=params.get('noise_covariance', 1.0))


@dataclass
class OcclusionParameters:
    """Occlusion chain and diffusion parameters."""
    p_occluded_visible: float = 0.1
    p_occluded_occluded: float = 0.7
    sigma: float = 0.2
    initial_occlusion_prob: Optional[float] = 0.1

    @classmethod
    def from_dict(cls, params: dict) -> 'OcclusionParameters':
        defaults = cls()
        return cls(
            p_occluded_visible=float(params.get('p_occluded_visible', defaults.p_occluded_visible)),
            p_occluded_occluded=float(params.get('p_occluded_occluded', defaults.p_occluded_occluded)),
            sigma=float(params.get('sigma', defaults.sigma)),
            initial_occlusion_prob=params.get('initial_occlusion_prob',
                                              defaults.initial_occlusion_prob),
        )
