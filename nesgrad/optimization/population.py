# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import copy
import numpy as np
import nesgrad.common.typing as tp
from nesgrad.common import errors
from nesgrad.functions.problem import Problem


class Population:
    """Container of decision vectors and their fitness vectors, for a given problem.

    Each decision vector added or modified is evaluated right away on the problem
    (increasing its fevals counter), and the best individual ever evaluated is kept
    as the champion.

    Parameters
    ----------
    problem: Problem
        the problem the individuals are evaluated on. The population owns
        it: use :code:`copy()` to get an independent population and problem.
    """

    def __init__(self, problem: Problem) -> None:
        self.problem = problem
        self._x: tp.List[np.ndarray] = []
        self._f: tp.List[np.ndarray] = []
        self._champion: tp.Optional[tp.Tuple[np.ndarray, np.ndarray]] = None

    @classmethod
    def random(cls, problem: Problem, size: int, seed: tp.Optional[int] = None) -> "Population":
        """Creates a population of size individuals sampled uniformly within the bounds"""
        rng = np.random.RandomState(seed)
        lower, upper = problem.bounds
        pop = cls(problem)
        for _ in range(size):
            pop.append(lower + rng.uniform(0, 1, size=lower.size) * (upper - lower))
        return pop

    def __len__(self) -> int:
        return len(self._x)

    @property
    def x(self) -> np.ndarray:
        """Decision vectors, as a (size, dimension) array copy"""
        return np.array(self._x, dtype=float).reshape(len(self), self.problem.dimension)

    @property
    def f(self) -> np.ndarray:
        """Fitness vectors, as a (size, num_objectives + num_constraints) array copy"""
        width = self.problem.num_objectives + self.problem.num_constraints
        return np.array(self._f, dtype=float).reshape(len(self), width)

    @property
    def champion_x(self) -> np.ndarray:
        return self._get_champion()[0].copy()

    @property
    def champion_f(self) -> np.ndarray:
        return self._get_champion()[1].copy()

    def append(self, x: tp.ArrayLike) -> None:
        """Evaluates and adds a new individual"""
        x = self._check_x(x)
        self._f.append(self._evaluate(x))
        self._x.append(x)

    def set_x(self, index: int, x: tp.ArrayLike) -> None:
        """Replaces the decision vector of an individual, and evaluates it"""
        x = self._check_x(x)
        self._check_index(index)
        self._f[index] = self._evaluate(x)
        self._x[index] = x

    def set_xf(self, index: int, x: tp.ArrayLike, f: tp.ArrayLike) -> None:
        """Replaces the decision and fitness vectors of an individual, without evaluation"""
        x = self._check_x(x)
        self._check_index(index)
        f = np.array(f, dtype=float, ndmin=1)
        self._f[index] = f
        self._x[index] = x
        self._update_champion(x, f)

    def best_idx(self) -> int:
        """Index of the individual with lowest fitness (single objective only)"""
        return int(np.argmin(self._single_objective()))

    def worst_idx(self) -> int:
        """Index of the individual with highest fitness (single objective only)"""
        return int(np.argmax(self._single_objective()))

    def copy(self) -> "Population":
        return copy.deepcopy(self)

    def _single_objective(self) -> np.ndarray:
        if self.problem.num_objectives != 1 or self.problem.num_constraints:
            raise errors.NesgradValueError(
                "Best and worst individuals are only defined for unconstrained single objective problems"
            )
        if not self._f:
            raise errors.NesgradValueError("Population is empty")
        return self.f[:, 0]

    def _evaluate(self, x: np.ndarray) -> np.ndarray:
        f = self.problem.fitness(x)
        self._update_champion(x, f)
        return f

    def _update_champion(self, x: np.ndarray, f: np.ndarray) -> None:
        # the champion is only tracked for single objective problems
        if self.problem.num_objectives != 1:
            return
        if self._champion is None or f[0] < self._champion[1][0]:
            self._champion = (x.copy(), f.copy())

    def _get_champion(self) -> tp.Tuple[np.ndarray, np.ndarray]:
        if self._champion is None:
            raise errors.NesgradValueError("No champion available (empty population or multiple objectives)")
        return self._champion

    def _check_x(self, x: tp.ArrayLike) -> np.ndarray:
        x = np.array(x, dtype=float, ndmin=1)
        if x.shape != (self.problem.dimension,):
            raise errors.NesgradValueError(
                f"Decision vector of shape {x.shape} does not match problem dimension {self.problem.dimension}"
            )
        return x

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self):
            raise IndexError(f"Index {index} out of range for population of size {len(self)}")

    def __repr__(self) -> str:
        return f"Population(size={len(self)}, problem={self.problem!r})"
