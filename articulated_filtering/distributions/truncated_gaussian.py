"""Gaussian truncated to a bounded interval."""
import numpy as np
from scipy import special


class TruncatedGaussian:
    """
    Gaussian N(mean, sigma^2) restricted to [lower_bound, upper_bound].

    Samples are produced by the inverse-CDF method, so a standard-normal
    (or standard-uniform) draw maps deterministically onto the interval.
    Every mapped value lies within the bounds.

    Parameters
    ----------
    mean : float
        Location of the untruncated Gaussian
    sigma : float
        Standard deviation of the untruncated Gaussian (>= 0)
    lower_bound, upper_bound : float
        Truncation interval, lower_bound < upper_bound
    """

    def __init__(self, mean=0.5, sigma=1.0, lower_bound=0.0, upper_bound=1.0):
        if not lower_bound < upper_bound:
            raise ValueError(
                f"lower_bound={lower_bound} must be below upper_bound={upper_bound}"
            )
        if not np.isfinite(mean):
            raise ValueError(f"mean must be finite, got {mean}")
        if not sigma >= 0.0:
            raise ValueError(f"sigma must be non-negative, got {sigma}")

        self.mean = float(mean)
        self.sigma = float(sigma)
        self.lower_bound = float(lower_bound)
        self.upper_bound = float(upper_bound)

        if self.sigma > 0.0:
            self._alpha = (self.lower_bound - self.mean) / self.sigma
            self._beta = (self.upper_bound - self.mean) / self.sigma
            # Interval entirely above the mean: work in the upper tail, where
            # the survival function keeps its precision.
            self._reflected = self._alpha > 0.0
            sign = -1.0 if self._reflected else 1.0
            self._cdf_low = special.ndtr(sign * self._alpha)
            self._cdf_high = special.ndtr(sign * self._beta)
            # complements 1 - cdf, evaluated directly
            self._sf_low = special.ndtr(-sign * self._alpha)
            self._sf_high = special.ndtr(-sign * self._beta)

        # All mass collapses onto one point when sigma is zero or the
        # interval sits so deep in a tail that its probability underflows.
        self._degenerate = self.sigma == 0.0 or self._cdf_high == self._cdf_low

    @property
    def bounds(self):
        return self.lower_bound, self.upper_bound

    def _nearest_bound(self):
        return min(max(self.mean, self.lower_bound), self.upper_bound)

    def _map(self, u, s):
        """
        Inverse CDF for probabilities given as u and its complement s = 1 - u.

        Whichever of u and s is smaller carries full precision, and the
        quantile is taken on the side of 0.5 where ndtri stays accurate.
        """
        u = np.asarray(u, dtype=float)
        s = np.asarray(s, dtype=float)
        if self._degenerate:
            return np.full_like(u, self._nearest_bound()) if u.ndim else self._nearest_bound()

        lower_half = u <= 0.5
        q = np.where(lower_half,
                     self._cdf_low + u * (self._cdf_high - self._cdf_low),
                     self._cdf_high + s * (self._cdf_low - self._cdf_high))
        q_complement = np.where(lower_half,
                                self._sf_low - u * (self._sf_low - self._sf_high),
                                self._sf_high + s * (self._sf_low - self._sf_high))
        sign = -1.0 if self._reflected else 1.0
        with np.errstate(divide='ignore', invalid='ignore'):
            z = np.where(q <= 0.5, sign * special.ndtri(q), -sign * special.ndtri(q_complement))

        x = self.mean + self.sigma * z
        # +/-inf land on the matching bound through the clip
        x = np.where(np.isnan(x), self._nearest_bound(), x)
        x = np.clip(x, self.lower_bound, self.upper_bound)
        return x if x.ndim else float(x)

    def map_standard_uniform(self, u):
        """Map draw(s) u in [0, 1] onto the truncated interval."""
        u = np.asarray(u, dtype=float)
        return self._map(u, 1.0 - u)

    def map_standard_normal(self, sample):
        """Map standard-normal draw(s) onto the truncated interval."""
        sample = np.asarray(sample, dtype=float)
        return self._map(special.ndtr(sample), special.ndtr(-sample))

    def sample(self, rng, size=None):
        """Draw samples from the truncated distribution."""
        return self.map_standard_uniform(rng.uniform(size=size))

    def pdf(self, x):
        """Density, zero outside the bounds."""
        x = np.asarray(x, dtype=float)
        inside = (x >= self.lower_bound) & (x <= self.upper_bound)
        if self._degenerate:
            # point mass
            return np.where(inside & (x == self._nearest_bound()), np.inf, 0.0)

        mass = abs(self._cdf_high - self._cdf_low)
        z = (x - self.mean) / self.sigma
        with np.errstate(divide='ignore', invalid='ignore'):
            density = np.exp(-0.5 * z**2) / (np.sqrt(2 * np.pi) * self.sigma * mass)
        return np.where(inside, density, 0.0)

    @property
    def expected_value(self):
        """Mean of the truncated distribution."""
        if self._degenerate:
            return self._nearest_bound()
        mass = abs(self._cdf_high - self._cdf_low)
        phi_a = np.exp(-0.5 * self._alpha**2) / np.sqrt(2 * np.pi)
        phi_b = np.exp(-0.5 * self._beta**2) / np.sqrt(2 * np.pi)
        value = self.mean + self.sigma * (phi_a - phi_b) / mass
        return float(np.clip(value, self.lower_bound, self.upper_bound))

    def __repr__(self):
        return (f"TruncatedGaussian(mean={self.mean}, sigma={self.sigma}, "
                f"lower_bound={self.lower_bound}, upper_bound={self.upper_bound})")
