"""Integration tests: tracker setup followed by repeated prediction steps."""

import numpy as np
import pytest

from articulated_filtering.builders import JointTransitionModelBuilder, InvalidNumberOfJointSigmasError
from articulated_filtering.config import (
    JointTransitionParameters,
    DampedWienerParameters,
    OcclusionParameters,
)
from articulated_filtering.filters import (
    predict_joint_particles,
    predict_damped_particles,
    predict_occlusions,
    kalman_predict,
)
from articulated_filtering.ssm import (
    DampedWienerProcess,
    ContinuousOcclusionProcessModel,
    RobotJointState,
)
from articulated_filtering.utils.link import sigmoid
from articulated_filtering.utils.metrics import sample_moments, compute_nees


JOINT_NAMES = ('torso', 'shoulder', 'elbow', 'wrist')


@pytest.fixture
def tracker_config():
    """Configuration as an external parameter source would deliver it."""
    return {
        'joint_transition': {'joint_sigma': 0.05, 'joint_sigmas': [0.01, 0.05, 0.05, 0.1],
                             'joint_count': len(JOINT_NAMES)},
        'velocity': {'damping': 1.5, 'noise_covariance': 0.2},
        'occlusion': {'p_occluded_visible': 0.1, 'p_occluded_occluded': 0.7,
                      'sigma': 0.2, 'initial_occlusion_prob': 0.1},
    }


class TestJointPredictionPipeline:
    """Particle and Gaussian prediction with builder-produced joint models."""

    def test_particles_agree_with_gaussian_prediction(self, rng, tracker_config):
        """Particle spread should match the Kalman prediction after many steps."""
        params = JointTransitionParameters.from_dict(tracker_config['joint_transition'])
        models = JointTransitionModelBuilder(params).build_all()
        initial = RobotJointState.from_joint_positions(
            JOINT_NAMES, {'torso': 0.0, 'shoulder': 0.5, 'elbow': -0.3, 'wrist': 1.2}
        )

        N, T = 5000, 25
        particles = np.tile(initial.positions, (N, 1))
        m, P = initial.positions.copy(), np.zeros((4, 4))

        for _ in range(T):
            particles = predict_joint_particles(models, particles, rng)
            m, P = kalman_predict(models, m, P)

        m_hat, P_hat = sample_moments(particles)
        np.testing.assert_allclose(m_hat, m, atol=0.03)
        np.testing.assert_allclose(np.diag(P_hat), np.diag(P), rtol=0.1)

        nees = compute_nees(m, P, particles)
        assert 3.5 < nees.mean() < 4.5

        estimate = initial.with_positions(m_hat)
        assert set(estimate.joint_positions()) == set(JOINT_NAMES)

    def test_bad_configuration_stops_setup(self, tracker_config):
        config = dict(tracker_config['joint_transition'], joint_sigmas=[0.1, 0.1])
        params = JointTransitionParameters.from_dict(config)

        with pytest.raises(InvalidNumberOfJointSigmasError):
            JointTransitionModelBuilder(params).build_all()


class TestVelocityPipeline:
    """Damped velocity process over repeated prediction steps."""

    def test_velocity_relaxes_to_input(self, rng, tracker_config):
        params = DampedWienerParameters.from_dict(tracker_config['velocity'])
        process = DampedWienerProcess.from_parameters(params)
        particles = np.zeros((1000, 1))
        target = np.array([1.0])

        for _ in range(40):
            particles = predict_damped_particles(process, 0.1, particles, rng, u=target * params.damping)

        # stationary mean u / damping, variance Q / (2 damping)
        m_hat, P_hat = sample_moments(particles)
        np.testing.assert_allclose(m_hat, target, atol=0.05)
        np.testing.assert_allclose(P_hat[0, 0], 0.2 / (2 * 1.5), rtol=0.15)

    def test_undamped_random_walk(self, rng):
        process = DampedWienerProcess(0.0, 1.0)
        particles = np.zeros((4000, 1))

        for _ in range(10):
            particles = predict_damped_particles(process, 0.1, particles, rng, u=np.array([0.5]))

        m_hat, P_hat = sample_moments(particles)
        np.testing.assert_allclose(m_hat, [0.5], atol=0.05)
        np.testing.assert_allclose(P_hat[0, 0], 1.0, rtol=0.1)


class TestOcclusionPipeline:
    """Occlusion of many sources over repeated prediction steps."""

    def test_occlusion_drifts_to_stationary(self, rng, tracker_config):
        params = OcclusionParameters.from_dict(tracker_config['occlusion'])
        model = ContinuousOcclusionProcessModel.from_parameters(params)
        logits = np.full(1000, model.initial_logit(params.initial_occlusion_prob))

        for _ in range(40):
            logits = predict_occlusions(model, 0.5, logits, rng)

        p = sigmoid(logits)
        assert np.all(np.isfinite(logits))
        assert np.all((p > 0.0) & (p < 1.0))
        # chain fixed point is 0.25; truncation at 0 pushes the average up a little
        p_inf = model.chain.stationary_probability
        assert p_inf - 0.05 < p.mean() < p_inf + 0.2
