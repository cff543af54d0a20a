"""Gaussian distribution over a state or noise space."""
import numpy as np
from scipy import linalg as sla
from scipy.stats import multivariate_normal


def _as_covariance(covariance, n_x):
    """Promote a scalar or matrix to an [n_x, n_x] covariance."""
    covariance = np.asarray(covariance, dtype=float)
    if covariance.ndim == 0:
        return covariance * np.eye(n_x)
    return np.atleast_2d(covariance)


def _square_root(covariance, tol):
    """
    Compute a factor L with L @ L.T = covariance.

    Cholesky is tried first; semi-definite matrices fall back to the
    symmetric eigen-decomposition with small negative eigenvalues clipped.
    `tol` is relative to the largest eigenvalue magnitude (at least 1).
    """
    try:
        return sla.cholesky(covariance, lower=True)
    except sla.LinAlgError:
        eigvals, eigvecs = np.linalg.eigh(covariance)
        scale = max(1.0, np.abs(eigvals).max())
        if np.any(eigvals < -tol * scale):
            raise ValueError(
                f"Covariance must be positive semi-definite, "
                f"smallest eigenvalue is {eigvals.min():.3e}"
            )
        return eigvecs * np.sqrt(np.clip(eigvals, 0.0, None))


class GaussianStateDistribution:
    """
    Gaussian N(mean, covariance) that maps standard-normal samples to states.

    Parameters
    ----------
    mean : array_like [n_x]
        Mean vector (a scalar is treated as a 1-vector)
    covariance : float or array_like [n_x, n_x], optional
        Covariance matrix. A scalar means covariance * I. Defaults to I.
    psd_tol : float
        Tolerance on negative eigenvalues when checking semi-definiteness,
        relative to the largest eigenvalue
    """

    def __init__(self, mean, covariance=None, psd_tol=1e-10):
        self._mean = np.atleast_1d(np.asarray(mean, dtype=float)).copy()
        if self._mean.ndim != 1:
            raise ValueError(f"Mean must be a vector, got shape {self._mean.shape}")

        n_x = self._mean.shape[0]
        if covariance is None:
            covariance = np.eye(n_x)
        covariance = _as_covariance(covariance, n_x)

        if covariance.shape != (n_x, n_x):
            raise ValueError(
                f"Covariance shape {covariance.shape} does not match mean dimension {n_x}"
            )
        if not np.allclose(covariance, covariance.T, atol=1e-12):
            raise ValueError("Covariance must be symmetric")

        self._covariance = covariance.copy()
        self._psd_tol = psd_tol
        self._sqrt = _square_root(self._covariance, psd_tol)

    @classmethod
    def from_square_root(cls, mean, operator):
        """Build from a square-root factor L, so that covariance = L @ L.T."""
        operator = np.atleast_2d(np.asarray(operator, dtype=float))
        dist = cls(mean, operator @ operator.T)
        dist._sqrt = operator.copy()
        return dist

    @property
    def dimension(self):
        """Dimension of the state space."""
        return self._mean.shape[0]

    @property
    def mean(self):
        """Mean vector [n_x]."""
        return self._mean.copy()

    @property
    def covariance(self):
        """Covariance matrix [n_x, n_x]."""
        return self._covariance.copy()

    @property
    def square_root(self):
        """Square-root operator L [n_x, n_x] with L @ L.T = covariance."""
        return self._sqrt.copy()

    def map_standard_normal(self, sample):
        """
        Map standard-normal sample(s) to state sample(s): mean + L @ sample.

        Parameters
        ----------
        sample : array_like [n_x] or [N, n_x]
            Standard-normal draws

        Returns
        -------
        ndarray [n_x] or [N, n_x]
        """
        sample = np.asarray(sample, dtype=float)
        if sample.ndim == 0:
            sample = sample.reshape(1)
        if sample.shape[-1] != self.dimension:
            raise ValueError(
                f"Sample dimension {sample.shape[-1]} does not match {self.dimension}"
            )
        return self._mean + sample @ self._sqrt.T

    def sample(self, rng, size=None):
        """Draw samples; returns [n_x] when size is None, else [size, n_x]."""
        if size is None:
            return self.map_standard_normal(rng.standard_normal(self.dimension))
        return self.map_standard_normal(rng.standard_normal((size, self.dimension)))

    def log_pdf(self, x):
        """Log density at x [n_x] or [N, n_x] (singular covariances allowed)."""
        return multivariate_normal.logpdf(
            x, mean=self._mean, cov=self._covariance, allow_singular=True
        )

    def __repr__(self):
        return (f"GaussianStateDistribution(mean={self._mean!r}, "
                f"covariance={self._covariance!r})")
