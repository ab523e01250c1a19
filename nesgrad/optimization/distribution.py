# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
from scipy import linalg
import nesgrad.common.typing as tp
from .utils import LearningRates


class SearchDistribution:
    """Multivariate normal search distribution of xNES, parametrized
    as mean + A.z with z standard normal.

    Parameters
    ----------
    mean: np.ndarray
        center of the distribution
    transform: np.ndarray
        the square (dimension x dimension) matrix A, a square root of the covariance
    sigma: float
        global step-size. It follows the isotropic part of the updates of A,
        but is only tracked for monitoring (A already includes it)

    Note
    ----
    The distribution is private mutable state of the algorithm owning it,
    and is not safe to share between concurrent evolutions.
    """

    def __init__(self, mean: np.ndarray, transform: np.ndarray, sigma: float) -> None:
        self.mean = np.array(mean, dtype=float)
        self.transform = np.array(transform, dtype=float)
        self.sigma = float(sigma)
        assert self.transform.shape == (self.dimension, self.dimension), "Transform must be a square matrix"

    @classmethod
    def from_bounds(
        cls, lower: np.ndarray, upper: np.ndarray, center: tp.ArrayLike, sigma0: tp.Rate = None
    ) -> "SearchDistribution":
        """Initial distribution centered on center, with a diagonal transform proportional
        to the width of the bounds (clipped to 1e-6 to avoid degenerate directions)
        """
        sigma = 1.0 if sigma0 is None else sigma0
        widths = np.maximum(np.asarray(upper, dtype=float) - np.asarray(lower, dtype=float), 1e-6)
        return cls(mean=center, transform=np.diag(widths * sigma), sigma=sigma)

    @property
    def dimension(self) -> int:
        return self.mean.size

    def sample(
        self, rng: np.random.RandomState, lower: np.ndarray, upper: np.ndarray, num: int
    ) -> tp.Tuple[np.ndarray, np.ndarray]:
        """Samples num candidates within the bounds

        Returns
        -------
        np.ndarray
            the (num, dimension) standard normal noise z
        np.ndarray
            the (num, dimension) candidates x = mean + A.z, in which each coordinate
            out of the bounds is resampled uniformly within the bounds.

        Note
        ----
        The repair only modifies x: z keeps the original draw, and is the one used in the update,
        so the update is only an approximation of the natural gradient when repairs happened.
        """
        z = np.zeros((num, self.dimension))
        x = np.zeros((num, self.dimension))
        for i in range(num):
            z[i] = rng.normal(0, 1, self.dimension)
            x[i] = self.mean + self.transform.dot(z[i])
            for j in np.nonzero(np.logical_or(x[i] < lower, x[i] > upper))[0]:
                x[i, j] = lower[j] + rng.uniform(0, 1) * (upper[j] - lower[j])
        return z, x

    def update(self, sorted_z: np.ndarray, utilities: np.ndarray, rates: LearningRates) -> None:
        """Natural gradient step from the noise of the candidates sorted by
        increasing fitness, weighted with the corresponding utilities

        Parameters
        ----------
        sorted_z: np.ndarray
            (popsize, dimension) noise used for the candidates, best first
        utilities: np.ndarray
            the popsize rank-based utilities, best first
        rates: LearningRates
            learning rates of the mean, step-size and covariance shape
        """
        dim = self.dimension
        identity = np.identity(dim)
        d_center = utilities.dot(sorted_z)
        # sum_i u_i * (z_i z_i^T - I)
        cov_grad = np.einsum("i,ij,ik->jk", utilities, sorted_z, sorted_z) - np.sum(utilities) * identity
        trace = np.trace(cov_grad)
        cov_grad -= trace / dim * identity
        d_transform = 0.5 * (rates.eta_sigma * trace / dim * identity + rates.eta_b * cov_grad)
        self.mean = self.mean + rates.eta_mu * self.transform.dot(d_center)
        self.transform = self.transform.dot(linalg.expm(d_transform))
        self.sigma *= float(np.exp(rates.eta_sigma / 2.0 * trace / dim))

    def copy(self) -> "SearchDistribution":
        return SearchDistribution(self.mean, self.transform, self.sigma)

    def __repr__(self) -> str:
        return f"SearchDistribution(dimension={self.dimension}, sigma={self.sigma})"
