# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Classical continuous test functions, to be minimized.
Registered with their known minimum value (info key "minimum"),
stochastic functions are flagged with info key "stochastic".
"""

from math import exp, sqrt
import numpy as np
import nesgrad.common.typing as tp
from nesgrad.common.decorators import Registry


registry: Registry[tp.Callable[..., float]] = Registry()


@registry.register_with_info(minimum=0.0)
def sphere(x: np.ndarray) -> float:
    """The most classical continuous optimization testbed.

    If you do not solve that one then you have a bug."""
    assert x.ndim == 1
    return float(x.dot(x))


@registry.register_with_info(minimum=0.0)
def sphere1(x: np.ndarray) -> float:
    """Translated sphere function."""
    return sphere(x - 1.0)


@registry.register_with_info(minimum=0.0)
def cigar(x: np.ndarray) -> float:
    """Classical example of ill conditioned function.

    The other classical example is ellipsoid.
    """
    return float(x[0]) ** 2 + 1000000.0 * sphere(x[1:])


@registry.register_with_info(minimum=0.0)
def discus(x: np.ndarray) -> float:
    """Only one variable is very penalized."""
    return sphere(x[1:]) + 1000000.0 * float(x[0]) ** 2


@registry.register_with_info(minimum=0.0)
def ellipsoid(x: np.ndarray) -> float:
    """Classical example of ill conditioned function.

    The other classical example is cigar.
    """
    dim = x.size
    weights = 10 ** np.linspace(0, 6, dim)
    return float(weights.dot(x ** 2))


@registry.register_with_info(minimum=0.0)
def rastrigin(x: np.ndarray) -> float:
    """Classical multimodal function."""
    cosi = float(np.sum(np.cos(2 * np.pi * x)))
    return float(10 * (len(x) - cosi) + sphere(x))


@registry.register_with_info(minimum=0.0)
def rosenbrock(x: np.ndarray) -> float:
    x_m_1 = x[:-1] - 1
    x_diff = x[:-1] ** 2 - x[1:]
    return float(100 * x_diff.dot(x_diff) + x_m_1.dot(x_m_1))


@registry.register_with_info(minimum=0.0)
def ackley(x: np.ndarray) -> float:
    dim = x.size
    sum_cos = np.sum(np.cos(2 * np.pi * x))
    return -20.0 * exp(-0.2 * sqrt(sphere(x) / dim)) - exp(sum_cos / dim) + 20 + exp(1)


@registry.register_with_info(minimum=0.0)
def griewank(x: np.ndarray) -> float:
    """Multimodal function, often used in Bayesian optimization."""
    part1 = sphere(x)
    part2 = np.prod(np.cos(x / np.sqrt(1 + np.arange(len(x)))))
    return 1 + (float(part1) / 4000.0) - float(part2)


@registry.register_with_info(minimum=0.0, stochastic=True)
def noisy_sphere(x: np.ndarray, *, seed: int) -> float:
    """Sphere function with multiplicative noise, deterministic for a given seed.

    The noise factor only depends on the seed, so that a problem reseeded
    with the same value provides the same landscape.
    """
    state = np.random.RandomState(seed % 2 ** 32)
    return sphere(x) * (1.0 + 0.1 * abs(state.normal()))
