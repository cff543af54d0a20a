"""Linear state transition model x' = A x + B w + C u."""
import numpy as np

from ..distributions import GaussianStateDistribution


def _frozen(matrix, name):
    matrix = np.array(matrix, dtype=float)
    if matrix.ndim != 2:
        raise ValueError(f"{name} must be a 2D matrix, got shape {matrix.shape}")
    matrix.flags.writeable = False
    return matrix


class LinearTransitionModel:
    """
    Linear Gaussian transition model.

    Parameters
    ----------
    dynamics_matrix : ndarray [n_x, n_x]
        A
    noise_matrix : ndarray [n_x, n_w]
        B, applied to a standard-normal noise vector w
    input_matrix : ndarray [n_x, n_u]
        C
    """

    def __init__(self, dynamics_matrix, noise_matrix, input_matrix):
        A = _frozen(dynamics_matrix, 'dynamics_matrix')
        B = _frozen(noise_matrix, 'noise_matrix')
        C = _frozen(input_matrix, 'input_matrix')

        n_x = A.shape[0]
        if A.shape != (n_x, n_x):
            raise ValueError(f"dynamics_matrix must be square, got {A.shape}")
        if B.shape[0] != n_x:
            raise ValueError(f"noise_matrix has {B.shape[0]} rows, expected {n_x}")
        if C.shape[0] != n_x:
            raise ValueError(f"input_matrix has {C.shape[0]} rows, expected {n_x}")

        self._A, self._B, self._C = A, B, C

    @classmethod
    def identity(cls, state_dimension, noise_scale=1.0):
        """Random walk model: A = I, B = noise_scale * I, C = I."""
        I = np.eye(state_dimension)
        return cls(I, noise_scale * I, I)

    @property
    def dynamics_matrix(self):
        return self._A

    @property
    def noise_matrix(self):
        return self._B

    @property
    def input_matrix(self):
        return self._C

    @property
    def state_dimension(self):
        return self._A.shape[0]

    @property
    def noise_dimension(self):
        return self._B.shape[1]

    @property
    def input_dimension(self):
        return self._C.shape[1]

    @property
    def noise_covariance(self):
        """Q = B B^T."""
        return self._B @ self._B.T

    def state(self, x, noise, u=None):
        """
        Propagate state(s).

        Parameters
        ----------
        x : ndarray [n_x] or [N, n_x]
        noise : ndarray [n_w] or [N, n_w]
            Standard-normal noise
        u : ndarray [n_u], optional
            Input, zero when omitted

        Returns
        -------
        ndarray [n_x] or [N, n_x]
        """
        x = np.asarray(x, dtype=float)
        noise = np.asarray(noise, dtype=float)
        if x.shape[-1] != self.state_dimension:
            raise ValueError(f"State dimension {x.shape[-1]} != {self.state_dimension}")
        if noise.shape[-1] != self.noise_dimension:
            raise ValueError(f"Noise dimension {noise.shape[-1]} != {self.noise_dimension}")

        x_next = x @ self._A.T + noise @ self._B.T
        if u is not None:
            x_next = x_next + self._C @ np.atleast_1d(np.asarray(u, dtype=float))
        return x_next

    def predict(self, mean, covariance, u=None):
        """
        Kalman prediction: A m + C u, A P A^T + B B^T.

        Returns
        -------
        GaussianStateDistribution
        """
        m = np.atleast_1d(np.asarray(mean, dtype=float))
        P = np.atleast_2d(np.asarray(covariance, dtype=float))

        m_pred = self._A @ m
        if u is not None:
            m_pred = m_pred + self._C @ np.atleast_1d(np.asarray(u, dtype=float))
        P_pred = self._A @ P @ self._A.T + self.noise_covariance
        # symmetrize against round-off
        P_pred = 0.5 * (P_pred + P_pred.T)
        return GaussianStateDistribution(m_pred, P_pred)

    def __repr__(self):
        return (f"LinearTransitionModel(n_x={self.state_dimension}, "
                f"n_w={self.noise_dimension}, n_u={self.input_dimension})")
