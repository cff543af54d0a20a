"""
Plots of predicted joint and occlusion trajectories.
"""
import logging
import os

import numpy as np
import matplotlib.pyplot as plt

from .link import sigmoid

logger = logging.getLogger(__name__)


def plot_joint_predictions(t, means, covariances, samples=None, joint_names=None,
                           n_sigma=2.0, save_path=None, title="Joint Prediction"):
    """
    Plot predicted joint means with uncertainty bands.

    Parameters
    ----------
    t : ndarray [T]
        Time stamps
    means : ndarray [T, J]
        Predicted means
    covariances : ndarray [T, J, J]
        Predicted covariances
    samples : ndarray [T, N, J], optional
        Propagated particles, drawn as faint points
    joint_names : list of str, optional
    n_sigma : float
        Width of the band in standard deviations
    save_path : str, optional
        Save and close the figure instead of returning it

    Returns
    -------
    matplotlib.figure.Figure or None
    """
    means = np.asarray(means).reshape(len(t), -1)
    J = means.shape[1]
    names = joint_names or [f'Joint {j}' for j in range(J)]

    fig, axes = plt.subplots(J, 1, figsize=(10, 3 * J), squeeze=False)
    for j in range(J):
        ax = axes[j, 0]
        std = np.sqrt(covariances[:, j, j])

        if samples is not None:
            for k in range(len(t)):
                ax.plot(np.full(samples.shape[1], t[k]), samples[k, :, j],
                        'k.', markersize=1, alpha=0.2)
        ax.plot(t, means[:, j], 'b-', linewidth=1.5, label='Predicted Mean')
        ax.fill_between(t, means[:, j] - n_sigma * std, means[:, j] + n_sigma * std,
                        alpha=0.2, color='blue', label=f'+/-{n_sigma:g}sigma')
        ax.set_xlabel('Time')
        ax.set_ylabel(names[j])
        ax.legend()
        ax.grid(True, alpha=0.3)

    axes[0, 0].set_title(title)
    plt.tight_layout()
    return _finish(fig, save_path)


def plot_occlusion_prediction(t, logits, save_path=None, title="Occlusion Probability"):
    """
    Plot occlusion probabilities of one or more sources over time.

    Parameters
    ----------
    t : ndarray [T]
    logits : ndarray [T] or [T, M]
        Occlusion logits, shown as probabilities
    save_path : str, optional

    Returns
    -------
    matplotlib.figure.Figure or None
    """
    probabilities = sigmoid(np.asarray(logits).reshape(len(t), -1))

    fig, ax = plt.subplots(figsize=(10, 4))
    for m in range(probabilities.shape[1]):
        ax.plot(t, probabilities[:, m], linewidth=1.2, label=f'Source {m}')
    ax.set_ylim(-0.05, 1.05)
    ax.set_xlabel('Time')
    ax.set_ylabel('P(occluded)')
    ax.set_title(title)
    if probabilities.shape[1] <= 10:
        ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    return _finish(fig, save_path)


def _finish(fig, save_path):
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
        plt.close(fig)
        logger.info("Saved: %s", os.path.basename(save_path))
        return None
    return fig
