"""
Prediction step of a filter driven by the process models.

Only the time update lives here; measurement updates and resampling belong
to the filter that calls these functions.
"""
import numpy as np
from scipy import linalg as sla


def predict_joint_particles(models, particles, rng, inputs=None):
    """
    Propagate joint particles with one independent model per joint.

    Parameters
    ----------
    models : list of LinearTransitionModel
        Scalar models, one per joint (column of particles)
    particles : ndarray [N, J]
        Joint positions of N particles
    rng : np.random.Generator
    inputs : ndarray [J], optional
        Per-joint input, zero when omitted

    Returns
    -------
    ndarray [N, J]
        Propagated particles
    """
    particles = np.asarray(particles, dtype=float)
    N, J = particles.shape
    if len(models) != J:
        raise ValueError(f"Got {len(models)} joint models for {J} joints")

    propagated = np.empty_like(particles)
    for j, model in enumerate(models):
        noise = rng.standard_normal((N, model.noise_dimension))
        u = None if inputs is None else inputs[j]
        propagated[:, j] = model.state(particles[:, j:j + 1], noise, u)[:, 0]
    return propagated


def predict_damped_particles(process, delta_time, particles, rng, u=None):
    """
    Propagate particles through a damped Wiener process.

    Each particle conditions the process on its own prior state and is then
    mapped with one standard-normal draw before the next particle conditions.

    Parameters
    ----------
    process : DampedWienerProcess
    delta_time : float
    particles : ndarray [N, n_x]
    rng : np.random.Generator
    u : ndarray [n_x], optional

    Returns
    -------
    ndarray [N, n_x]
    """
    particles = np.asarray(particles, dtype=float)
    N = particles.shape[0]
    noise = rng.standard_normal((N, process.noise_dimension))

    propagated = np.empty_like(particles)
    for i in range(N):
        process.condition(delta_time, particles[i], u)
        propagated[i] = process.map_standard_normal(noise[i])
    return propagated


def predict_occlusions(model, delta_time, logits, rng):
    """
    Propagate per-source occlusion logits.

    Parameters
    ----------
    model : ContinuousOcclusionProcessModel
    delta_time : float
    logits : ndarray [M]
        Prior occlusion logit of each source
    rng : np.random.Generator

    Returns
    -------
    ndarray [M]
        Predicted occlusion logits
    """
    logits = np.asarray(logits, dtype=float).reshape(-1)
    noise = rng.standard_normal(logits.shape[0])

    predicted = np.empty_like(logits)
    for i, (logit_i, z) in enumerate(zip(logits, noise)):
        model.condition(delta_time, logit_i)
        predicted[i] = model.map_standard_normal(z)
    return predicted


def kalman_predict(models, mean, covariance, inputs=None):
    """
    Gaussian time update with independent per-joint models.

    The joint transition is block diagonal in the per-joint matrices, so
    correlations between joints in the prior are carried through A.

    Parameters
    ----------
    models : list of LinearTransitionModel
    mean : ndarray [n_x]
    covariance : ndarray [n_x, n_x]
    inputs : list of ndarray, optional
        One input per model

    Returns
    -------
    m_pred : ndarray [n_x]
    P_pred : ndarray [n_x, n_x]
    """
    if len(models) == 0:
        return np.asarray(mean, dtype=float), np.asarray(covariance, dtype=float)

    A = sla.block_diag(*[m.dynamics_matrix for m in models])
    B = sla.block_diag(*[m.noise_matrix for m in models])
    C = sla.block_diag(*[m.input_matrix for m in models])

    mean = np.asarray(mean, dtype=float)
    covariance = np.asarray(covariance, dtype=float)
    if A.shape[0] != mean.shape[0]:
        raise ValueError(f"Models cover {A.shape[0]} states, mean has {mean.shape[0]}")

    m_pred = A @ mean
    if inputs is not None:
        m_pred = m_pred + C @ np.concatenate([np.atleast_1d(u) for u in inputs])
    P_pred = A @ covariance @ A.T + B @ B.T
    return m_pred, 0.5 * (P_pred + P_pred.T)
