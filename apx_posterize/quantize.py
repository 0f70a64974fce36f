"""Palette extraction using k-means++ seeded Lloyd clustering."""

import logging
from typing import Optional, Tuple, Union

import numpy as np
from sklearn.cluster import kmeans_plusplus

from .color import default_palette, nearest_palette_index
from .types import ALPHA_THRESHOLD, Palette, PixelBuffer, validate_n_colors

logger = logging.getLogger(__name__)

SAMPLE_TARGET = 10000
MAX_ITERATIONS = 50
CONVERGENCE_THRESHOLD = 1.0

RandomState = Optional[Union[int, np.random.RandomState]]


def sample_pixels(buffer: PixelBuffer, target: int = SAMPLE_TARGET) -> np.ndarray:
    """Subsample opaque pixels for clustering.

    Every ``step``-th pixel in row-major order is taken, with ``step``
    chosen so that roughly ``target`` pixels are visited. Pixels with
    alpha below 128 are dropped.

    Args:
        buffer: Input pixel buffer
        target: Approximate number of pixels to visit

    Returns:
        Array of RGB samples (N, 3), uint8
    """
    flat = buffer.rgba.reshape(-1, 4)
    step = max(1, flat.shape[0] // target)
    sampled = flat[::step]
    return sampled[sampled[:, 3] >= ALPHA_THRESHOLD][:, :3]


def kmeans(
    samples: np.ndarray,
    n_colors: int,
    random_state: RandomState = None,
    max_iter: int = MAX_ITERATIONS,
    tol: float = CONVERGENCE_THRESHOLD,
) -> Tuple[np.ndarray, int]:
    """Cluster RGB samples into ``n_colors`` centroids.

    Seeds with k-means++ (one candidate per draw, so each new seed is
    drawn with probability proportional to its squared distance to the
    nearest existing seed), then runs Lloyd iterations until every
    centroid moves less than ``tol`` or ``max_iter`` is reached. A
    cluster that loses all its members keeps its previous centroid.

    Args:
        samples: Array of RGB samples (N, 3) with N >= n_colors
        n_colors: Number of clusters
        random_state: Seed or RandomState for the seeding draws
        max_iter: Iteration cap
        tol: Convergence threshold on centroid movement

    Returns:
        Tuple of (centroids as float array (K, 3), iterations run)
    """
    points = samples.astype(np.float64)
    centroids, _ = kmeans_plusplus(
        points,
        n_clusters=n_colors,
        random_state=random_state,
        n_local_trials=1,
    )

    iterations = 0
    for iterations in range(1, max_iter + 1):
        labels = nearest_palette_index(points, centroids)

        counts = np.bincount(labels, minlength=n_colors)
        sums = np.zeros((n_colors, 3), dtype=np.float64)
        np.add.at(sums, labels, points)

        updated = centroids.copy()
        filled = counts > 0
        updated[filled] = sums[filled] / counts[filled, np.newaxis]

        shift = np.sqrt(np.sum((updated - centroids) ** 2, axis=1))
        centroids = updated
        if np.all(shift < tol):
            break

    return centroids, iterations


def extract_palette(buffer: PixelBuffer, n_colors: int, random_state: RandomState = None) -> Palette:
    """Extract a palette of ``n_colors`` representative colors.

    Falls back to an evenly spaced hue wheel when the buffer has fewer
    opaque samples than requested colors.

    Args:
        buffer: Input pixel buffer
        n_colors: Palette size, 2-16
        random_state: Seed or RandomState; None uses fresh entropy

    Returns:
        List of ``n_colors`` RGB tuples

    Raises:
        ConfigurationError: If n_colors is outside [2, 16]
    """
    n_colors = validate_n_colors(n_colors)
    samples = sample_pixels(buffer)

    if len(samples) < n_colors:
        logger.debug(
            f"Only {len(samples)} opaque samples for {n_colors} colors, using fallback palette"
        )
        return default_palette(n_colors)

    centroids, iterations = kmeans(samples, n_colors, random_state=random_state)
    logger.info(f"Extracted {n_colors} colors from {len(samples)} samples in {iterations} iterations")

    rounded = np.clip(np.floor(centroids + 0.5), 0, 255).astype(int)
    return [tuple(int(c) for c in centroid) for centroid in rounded]
