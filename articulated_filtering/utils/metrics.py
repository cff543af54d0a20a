"""
Consistency checks for predictive distributions.
"""
import numpy as np


def sample_moments(samples):
    """
    Empirical mean and covariance of samples.

    Parameters
    ----------
    samples : ndarray [N] or [N, n_x]

    Returns
    -------
    mean : ndarray [n_x]
    covariance : ndarray [n_x, n_x]
    """
    samples = np.asarray(samples, dtype=float)
    if samples.ndim == 1:
        samples = samples.reshape(-1, 1)
    mean = samples.mean(axis=0)
    diff = samples - mean
    covariance = diff.T @ diff / (samples.shape[0] - 1)
    return mean, covariance


def compute_nees(mean, covariance, xs, regularize=1e-12):
    """
    Normalized Estimation Error Squared of samples against one Gaussian.

    NEES = (x - m)' P^{-1} (x - m); for samples drawn from N(m, P) its
    average is n_x.

    Parameters
    ----------
    mean : ndarray [n_x]
    covariance : ndarray [n_x, n_x]
    xs : ndarray [N, n_x]
    regularize : float
        Added to the diagonal of P

    Returns
    -------
    ndarray [N]
    """
    xs = np.asarray(xs, dtype=float)
    if xs.ndim == 1:
        xs = xs.reshape(-1, 1)
    mean = np.atleast_1d(mean)
    P = np.atleast_2d(covariance) + regularize * np.eye(mean.shape[0])

    errors = xs - mean
    try:
        solved = np.linalg.solve(P, errors.T).T
    except np.linalg.LinAlgError:
        solved = np.linalg.lstsq(P, errors.T, rcond=None)[0].T
    return np.einsum('ij,ij->i', errors, solved)
