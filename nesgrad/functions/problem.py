# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import nesgrad.common.typing as tp
from nesgrad.common import errors


class Problem:
    """Box-bounded optimization problem: a fitness function along with the bounds of
    its decision vector and its shape (objectives and constraints).

    Parameters
    ----------
    function: callable
        function taking a decision vector (np.ndarray) and returning either a float or
        a vector of num_objectives + num_constraints floats (objectives first).
        Stochastic functions must also accept a :code:`seed` keyword argument.
    lower: array-like
        lower bounds of the decision vector
    upper: array-like
        upper bounds of the decision vector
    num_objectives: int
        number of objectives returned by the function
    num_constraints: int
        number of constraints returned by the function after the objectives
    stochastic: bool
        whether the function is stochastic, in which case it is called with the current
        seed of the problem (see :code:`seed`)
    seed: int
        initial seed for stochastic functions
    name: str
        name of the problem (defaults to the function name)

    Note
    ----
    The problem keeps track of the number of fitness evaluations in :code:`fevals`.
    """

    def __init__(
        self,
        function: tp.Union[tp.Callable[[np.ndarray], tp.Loss], tp.StochasticFunction],
        lower: tp.ArrayLike,
        upper: tp.ArrayLike,
        *,
        num_objectives: int = 1,
        num_constraints: int = 0,
        stochastic: bool = False,
        seed: int = 0,
        name: tp.Optional[str] = None,
    ) -> None:
        assert callable(function)
        self._function = function
        self._lower = np.array(lower, dtype=float, ndmin=1)
        self._upper = np.array(upper, dtype=float, ndmin=1)
        if self._lower.ndim != 1 or self._lower.shape != self._upper.shape:
            raise errors.NesgradValueError(
                f"Bounds must be vectors of same length (got shapes {self._lower.shape} and {self._upper.shape})"
            )
        if not self._lower.size:
            raise errors.NesgradValueError("No variable to optimize: bounds are empty")
        if not (np.all(np.isfinite(self._lower)) and np.all(np.isfinite(self._upper))):
            raise errors.NesgradValueError("Bounds must be finite")
        if np.any(self._lower > self._upper):
            raise errors.NesgradValueError(f"Lower bounds {self._lower} must not exceed upper bounds {self._upper}")
        if num_objectives < 1 or num_constraints < 0:
            raise errors.NesgradValueError(
                f"Invalid problem shape: {num_objectives} objective(s) and {num_constraints} constraint(s)"
            )
        self.num_objectives = int(num_objectives)
        self.num_constraints = int(num_constraints)
        self.stochastic = stochastic
        self.seed = int(seed)
        self.fevals = 0
        if name is None:
            name = getattr(function, "__name__", function.__class__.__name__)
        self.name = name

    @property
    def dimension(self) -> int:
        return self._lower.size

    @property
    def bounds(self) -> tp.Bounds:
        """Copies of the (lower, upper) bounds"""
        return self._lower.copy(), self._upper.copy()

    def fitness(self, x: tp.ArrayLike) -> np.ndarray:
        """Evaluates the decision vector and returns its fitness vector
        (num_objectives objectives followed by num_constraints constraints)
        """
        x = np.array(x, dtype=float, ndmin=1)
        if x.shape != (self.dimension,):
            raise errors.NesgradValueError(
                f"Decision vector of shape {x.shape} does not match dimension {self.dimension} of {self.name}"
            )
        output = self._function(x, seed=self.seed) if self.stochastic else self._function(x)  # type: ignore
        fitness = np.array(output, dtype=float, ndmin=1)
        expected = self.num_objectives + self.num_constraints
        if fitness.shape != (expected,):
            raise errors.NesgradValueError(
                f"Fitness of shape {fitness.shape} returned by {self.name}, expected ({expected},)"
            )
        self.fevals += 1
        return fitness

    def __repr__(self) -> str:
        return (
            f"Problem({self.name}, dimension={self.dimension}, num_objectives={self.num_objectives}, "
            f"num_constraints={self.num_constraints}, stochastic={self.stochastic})"
        )
