# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import pytest
import numpy as np
from nesgrad.common import testing
from nesgrad.common import errors
from nesgrad.functions import corefuncs
from nesgrad.functions.problem import Problem
from .population import Population


def _sphere_problem(dimension: int = 2) -> Problem:
    return Problem(corefuncs.sphere, -5 * np.ones(dimension), 5 * np.ones(dimension))


def test_random_population() -> None:
    problem = Problem(corefuncs.sphere, [-1, 10], [1, 12])
    pop = Population.random(problem, 20, seed=12)
    np.testing.assert_equal(len(pop), 20)
    np.testing.assert_equal(pop.x.shape, (20, 2))
    np.testing.assert_equal(pop.f.shape, (20, 1))
    np.testing.assert_equal(problem.fevals, 20)
    testing.assert_within_bounds(pop.x, [-1, 10], [1, 12])
    np.testing.assert_array_almost_equal(pop.f[:, 0], np.sum(pop.x ** 2, axis=1))
    other = Population.random(_sphere_problem(), 20, seed=12)
    assert not np.array_equal(other.x, pop.x)
    np.testing.assert_array_equal(Population.random(Problem(corefuncs.sphere, [-1, 10], [1, 12]), 20, seed=12).x, pop.x)


def test_best_worst_and_champion() -> None:
    pop = Population(_sphere_problem())
    for x in ([1, 1], [0.5, 0], [3, 3], [-2, 0]):
        pop.append(x)
    np.testing.assert_equal(pop.best_idx(), 1)
    np.testing.assert_equal(pop.worst_idx(), 2)
    np.testing.assert_array_equal(pop.champion_x, [0.5, 0])
    # the champion is kept even if the individual is replaced by a worse one
    pop.set_x(1, [4, 4])
    np.testing.assert_equal(pop.best_idx(), 0)
    np.testing.assert_equal(pop.worst_idx(), 1)
    np.testing.assert_array_equal(pop.champion_f, [0.25])
    pop.set_x(3, [0.1, 0])
    np.testing.assert_array_equal(pop.champion_x, [0.1, 0])
    np.testing.assert_equal(pop.problem.fevals, 6)


def test_set_xf_does_not_evaluate() -> None:
    pop = Population(_sphere_problem())
    pop.append([1, 1])
    pop.set_xf(0, [2, 2], [-1.0])
    np.testing.assert_equal(pop.problem.fevals, 1)
    np.testing.assert_array_equal(pop.f, [[-1.0]])
    np.testing.assert_array_equal(pop.champion_x, [2, 2])


def test_copy_is_independent() -> None:
    pop = Population.random(_sphere_problem(), 5, seed=1)
    other = pop.copy()
    other.set_x(0, [0, 0])
    np.testing.assert_equal(pop.problem.fevals, 5)
    np.testing.assert_equal(other.problem.fevals, 6)
    assert pop.x[0, 0] != 0 or pop.x[0, 1] != 0
    assert other.problem is not pop.problem


def test_population_errors() -> None:
    pop = Population(_sphere_problem())
    with pytest.raises(errors.NesgradValueError):
        pop.best_idx()
    with pytest.raises(errors.NesgradValueError):
        pop.champion_x  # pylint: disable=pointless-statement
    with pytest.raises(errors.NesgradValueError):
        pop.append([1, 2, 3])
    pop.append([1, 2])
    with pytest.raises(IndexError):
        pop.set_x(1, [1, 2])
    np.testing.assert_equal(pop.problem.fevals, 1)


def test_multiobjective_population() -> None:
    problem = Problem(lambda x: [x[0], x[1]], [0, 0], [1, 1], num_objectives=2)
    pop = Population.random(problem, 5, seed=0)
    np.testing.assert_equal(pop.f.shape, (5, 2))
    with pytest.raises(errors.NesgradValueError):
        pop.worst_idx()
    assert "size=5" in repr(pop)


def test_empty_population_arrays() -> None:
    pop = Population(_sphere_problem(3))
    np.testing.assert_equal(pop.x.shape, (0, 3))
    np.testing.assert_equal(pop.f.shape, (0, 1))
