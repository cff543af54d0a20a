"""Link functions between the probability domain (0, 1) and the real line."""
import numpy as np
from scipy import special

# Probabilities are kept this far away from 0 and 1 before taking the logit
PROBABILITY_EPS = 1e-12


def sigmoid(x):
    """Logistic function, maps the real line onto (0, 1)."""
    return special.expit(x)


def logit(p):
    """Inverse of sigmoid: log(p / (1 - p))."""
    return special.logit(p)


def clamp_probability(p, eps=PROBABILITY_EPS):
    """Clip probabilities into [eps, 1 - eps] so their logit stays finite."""
    return np.clip(p, eps, 1.0 - eps)
