# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import math
import numpy as np
import nesgrad.common.typing as tp
from nesgrad.common import errors


class LogLine(tp.NamedTuple):
    """Single line of an algorithm log

    - gen: the generation number
    - fevals: the number of function evaluations used since the start of the call
    - best: the best fitness found so far during the call
    - dx: norm of the first sampled mutation (A.z), a proxy for the flatness in decision space
    - df: fitness difference between the best and worst individuals of the generation
    - sigma: the current step-size
    """

    gen: int
    fevals: int
    best: float
    dx: float
    df: float
    sigma: float


def utility_weights(popsize: int) -> np.ndarray:
    """Rank-based utilities, best first.

    Weights are max(0, log(popsize / 2 + 1) - log(rank + 1)), normalized to sum to 1
    and shifted by the uniform baseline 1 / popsize, so that they sum to 0.
    """
    if popsize < 1:
        raise errors.NesgradValueError(f"Utilities require a positive population size (got {popsize})")
    ranks = np.arange(popsize)
    weights = np.maximum(0.0, math.log(popsize / 2.0 + 1.0) - np.log(ranks + 1.0))
    return weights / np.sum(weights) - 1.0 / popsize


class LearningRates(tp.NamedTuple):
    """Learning rates of the mean (eta_mu), of the step-size (eta_sigma)
    and of the covariance shape (eta_b)
    """

    eta_mu: float
    eta_sigma: float
    eta_b: float

    @classmethod
    def resolve(
        cls, dimension: int, eta_mu: tp.Rate = None, eta_sigma: tp.Rate = None, eta_b: tp.Rate = None
    ) -> "LearningRates":
        """Fills unspecified (None) rates with their dimension-dependent defaults"""
        # Glasmachers et al. (2010) defaults
        common = 0.6 * (3.0 + math.log(dimension)) / (dimension * math.sqrt(dimension))
        return cls(
            eta_mu=1.0 if eta_mu is None else eta_mu,
            eta_sigma=common if eta_sigma is None else eta_sigma,
            eta_b=common if eta_b is None else eta_b,
        )


def check_rate(name: str, value: tp.Rate) -> tp.Rate:
    """Checks that the value is None (automatic selection) or in ]0, 1]"""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        raise errors.NesgradValueError(f"{name} must be a float in ]0,1] or None, got {value!r}")
    if not 0 < value <= 1:
        raise errors.NesgradValueError(
            f"{name} must be in ]0,1] or None if its value has to be selected automatically, "
            f"a value of {value} was detected"
        )
    return float(value)


def default_popsize(dimension: int) -> int:
    """Usual population size for natural evolution strategies"""
    return 4 + int(3 * math.log(dimension))
