# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import logging
import warnings
import numpy as np
import nesgrad.common.typing as tp
from nesgrad.common import errors
from . import base
from . import utils
from .distribution import SearchDistribution
from .population import Population


logger = logging.getLogger(__name__)


@base.registry.register
class XNES(base.Algorithm):
    """Exponential Natural Evolution Strategies (xNES).
    This evolution strategy samples candidates from a multivariate normal distribution,
    and adapts its mean, step-size and covariance following the natural gradient
    of the expected fitness, through an exponential parametrization of the covariance.

    Parameters
    ----------
    generations: int
        number of generations to evolve for at each call to evolve
    eta_mu: Optional[float]
        learning rate of the mean, in ]0, 1] (default: 1)
    eta_sigma: Optional[float]
        learning rate of the step-size, in ]0, 1]
        (default: 0.6 * (3 + log(d)) / (d * sqrt(d)), with d the dimension)
    eta_b: Optional[float]
        learning rate of the covariance shape, in ]0, 1] (default: same as eta_sigma)
    sigma0: Optional[float]
        initial step-size in ]0, 1], the initial search width along the i-th direction
        is sigma0 * (ub_i - lb_i) (default: 1)
    ftol: float
        stops when the fitness difference between the best and worst individuals
        gets lower (checked every 10 generations)
    xtol: float
        stops when the norm of the first sampled mutation gets lower
        (checked every 10 generations)
    memory: bool
        if True, the distribution is not reset between successive calls to evolve
        (unless the dimension of the problem changes)
    seed: Optional[int]
        seed of the internal random state (random by default)

    Note
    ----
    - Candidates sampled out of the bounds are forced back in by resampling
      uniformly the offending coordinates. The noise used for the update is not
      modified accordingly.
    - The initial distribution is centered on the best individual of the population,
      with a width depending on the bounds, so that heterogeneously scaled variables
      are not a problem.
    - All individuals are replaced at each generation: the algorithm is not elitist,
      and the best fitness of the population may increase from one generation to the other.
    - Glasmachers, T., Schaul, T., Yi, S., Wierstra, D., & Schmidhuber, J. (2010).
      Exponential natural evolution strategies. In Proceedings of the 12th annual conference
      on Genetic and evolutionary computation (pp. 393-400).
    """

    # pylint: disable=too-many-instance-attributes
    def __init__(
        self,
        generations: int = 1,
        *,
        eta_mu: tp.Rate = None,
        eta_sigma: tp.Rate = None,
        eta_b: tp.Rate = None,
        sigma0: tp.Rate = None,
        ftol: float = 1e-6,
        xtol: float = 1e-6,
        memory: bool = False,
        seed: tp.Optional[int] = None,
    ) -> None:
        self.generations = generations
        self.eta_mu = utils.check_rate("eta_mu", eta_mu)
        self.eta_sigma = utils.check_rate("eta_sigma", eta_sigma)
        self.eta_b = utils.check_rate("eta_b", eta_b)
        self.sigma0 = utils.check_rate("sigma0", sigma0)
        self.ftol = float(ftol)
        self.xtol = float(xtol)
        self.memory = bool(memory)
        super().__init__(seed=seed)
        self.name = "xNES"
        self._distribution: tp.Optional[SearchDistribution] = None

    @property
    def generations(self) -> int:
        """int: number of generations to evolve for at each call to evolve"""
        return self._generations

    @generations.setter
    def generations(self, generations: int) -> None:
        if isinstance(generations, bool) or not isinstance(generations, (int, np.integer)) or generations < 0:
            raise errors.NesgradValueError(f"generations must be a non-negative integer, got {generations!r}")
        self._generations = int(generations)

    @property
    def distribution(self) -> tp.Optional[SearchDistribution]:
        """Copy of the current search distribution (None before the first evolution)"""
        return None if self._distribution is None else self._distribution.copy()

    def _config(self) -> tp.Dict[str, tp.Any]:
        return dict(
            generations=self.generations,
            eta_mu=self.eta_mu,
            eta_sigma=self.eta_sigma,
            eta_b=self.eta_b,
            sigma0=self.sigma0,
            ftol=self.ftol,
            xtol=self.xtol,
            memory=self.memory,
            seed=self.seed,
        )

    def _check_compatibility(self, population: Population) -> None:
        problem = population.problem
        if problem.num_constraints:
            raise errors.IncompatibleProblemError(
                f"Non linear constraints detected in {problem.name} instance. {self.name} cannot deal with them"
            )
        if problem.num_objectives != 1:
            raise errors.IncompatibleProblemError(
                f"Multiple objectives detected in {problem.name} instance. {self.name} cannot deal with them"
            )
        if len(population) < 5:
            raise errors.IncompatibleProblemError(
                f"{self.name} needs at least 5 individuals in the population, {len(population)} detected"
            )

    def _prepare_distribution(self, population: Population) -> SearchDistribution:
        """Returns the distribution to start from: the one from the previous call if memory is
        activated and the dimension did not change, a new one centered on the best individual otherwise
        """
        dimension = population.problem.dimension
        if not self.memory or self._distribution is None or self._distribution.dimension != dimension:
            lower, upper = population.problem.bounds
            center = population.x[population.best_idx()]
            self._distribution = SearchDistribution.from_bounds(lower, upper, center, sigma0=self.sigma0)
        return self._distribution

    def _internal_evolve(self, population: Population) -> Population:
        self._check_compatibility(population)
        self._log.clear()
        pop = population.copy()
        if not self.generations:
            return pop
        problem = pop.problem
        dimension = problem.dimension
        popsize = len(pop)
        lower, upper = problem.bounds
        fevals0 = problem.fevals
        if popsize < utils.default_popsize(dimension):
            warnings.warn(
                f"{self.name} is inefficient with {popsize} individuals in dimension {dimension} "
                f"(advised: at least {utils.default_popsize(dimension)})",
                errors.InefficientSettingsWarning,
            )
        rates = utils.LearningRates.resolve(dimension, self.eta_mu, self.eta_sigma, self.eta_b)
        utilities = utils.utility_weights(popsize)
        distribution = self._prepare_distribution(pop)
        log_level = logging.INFO if self.verbosity else logging.DEBUG
        logger.log(log_level, "%s with %s and step-size %s", self.name, rates, distribution.sigma)
        logger.debug("Utilities: %s", utilities)
        best = float("inf")  # best fitness evaluated during this call
        for gen in range(1, self.generations + 1):
            if problem.stochastic:
                problem.seed = int(self._rng.randint(2 ** 32, dtype=np.uint32))
            z, x = distribution.sample(self._rng, lower, upper, popsize)
            for i, candidate in enumerate(x):
                pop.set_x(i, candidate)
            fitness = pop.f[:, 0]
            # flatness of the population, measured on the first sample only
            dx = float(np.linalg.norm(distribution.transform.dot(z[0])))
            df = float(abs(fitness[pop.best_idx()] - fitness[pop.worst_idx()]))
            best = min(best, float(fitness[pop.best_idx()]))
            if self.verbosity and (gen % self.verbosity == 1 or self.verbosity == 1):
                line = utils.LogLine(gen, problem.fevals - fevals0, best, dx, df, distribution.sigma)
                self._record(line)
            if not gen % 10:
                if dx < self.xtol:
                    logger.log(log_level, "Exit condition -- xtol < %s", self.xtol)
                    return pop
                if df < self.ftol:
                    logger.log(log_level, "Exit condition -- ftol < %s", self.ftol)
                    return pop
            order = np.argsort(fitness, kind="mergesort")
            distribution.update(z[order], utilities, rates)
        logger.log(log_level, "Exit condition -- generations = %s", self.generations)
        return pop

    def _record(self, line: utils.LogLine) -> None:
        if len(self._log) % 50 == 0:
            logger.info("%7s%15s%15s%15s%15s%15s", "Gen:", "Fevals:", "Best:", "dx:", "df:", "sigma:")
        logger.info("%7d%15d%15.6g%15.6g%15.6g%15.6g", *line)
        self._log.append(line)
