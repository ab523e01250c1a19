# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import pickle
from pathlib import Path
import numpy as np
import nesgrad.common.typing as tp
from nesgrad.common import errors
from nesgrad.common import tools as ngtools
from nesgrad.common.decorators import Registry
from .population import Population
from .utils import LogLine


registry: Registry[tp.Type["Algorithm"]] = Registry()
X = tp.TypeVar("X", bound="Algorithm")


def load(cls: tp.Type[X], filepath: tp.PathLike) -> X:
    """Loads a pickle file and checks that it contains an algorithm of the given class."""
    filepath = Path(filepath)
    with filepath.open("rb") as f:
        algo = pickle.load(f)
    assert isinstance(algo, cls), f"You should only load {cls} with this method (found {type(algo)})"
    return algo


def _random_seed() -> int:
    return int(np.random.randint(2 ** 32, dtype=np.uint32))


class Algorithm:
    """Population-based algorithm framework, with main function:

    - :code:`evolve(population)` which provides an evolved copy of the population

    This class is abstract, subclasses must implement :code:`_internal_evolve` and
    can rely on the provided seeded random state (:code:`_rng`), verbosity and log.

    Parameters
    ----------
    seed: int or None
        seed of the internal random state (random if None)

    Note
    ----
    Algorithms hold mutable state (random state, log, possibly a memory of the previous
    calls). The same instance must not be used by concurrent evolve calls.
    """

    def __init__(self, seed: tp.Optional[int] = None) -> None:
        self._seed = _random_seed() if seed is None else int(seed)
        self._rng = np.random.RandomState(self._seed)
        self._verbosity = 0
        self._log: tp.List[LogLine] = []
        self.name = self.__class__.__name__

    @property
    def seed(self) -> int:
        """int: seed controlling the stochastic behavior of the algorithm.
        Setting it reseeds the internal random state.
        """
        return self._seed

    @seed.setter
    def seed(self, seed: int) -> None:
        self._seed = int(seed)
        self._rng.seed(self._seed)

    @property
    def verbosity(self) -> int:
        """int: 0 for no output, otherwise a log line is recorded (and logged at INFO level)
        every :code:`verbosity` generations
        """
        return self._verbosity

    @verbosity.setter
    def verbosity(self, level: int) -> None:
        if level < 0:
            raise errors.NesgradValueError(f"Verbosity must be non-negative, got {level}")
        self._verbosity = int(level)

    @property
    def log(self) -> tp.Tuple[LogLine, ...]:
        """Log lines of the last call to evolve, in chronological order"""
        return tuple(self._log)

    def evolve(self, population: Population) -> Population:
        """Evolves the population and returns the evolved copy

        Parameters
        ----------
        population: Population
            the population to evolve, it is not modified

        Returns
        -------
        Population
            the evolved population
        """
        return self._internal_evolve(population)

    def _internal_evolve(self, population: Population) -> Population:
        raise NotImplementedError

    def _config(self) -> tp.Dict[str, tp.Any]:
        """Initialization arguments of the instance, used for its representation"""
        return {"seed": self._seed}

    def get_extra_info(self) -> str:
        """Human readable summary of the configuration"""
        # None stands for automatically selected values
        lines = [f"{name}: {'auto' if value is None else value}" for name, value in self._config().items()]
        lines.append(f"verbosity: {self._verbosity}")
        return "\n".join("\t" + line for line in lines)

    def dump(self, filepath: tp.PathLike) -> None:
        """Pickles the algorithm (configuration, memory, random state and log) into a file."""
        filepath = Path(filepath)
        with filepath.open("wb") as f:
            pickle.dump(self, f)

    @classmethod
    def load(cls: tp.Type[X], filepath: tp.PathLike) -> X:
        """Loads a pickle and checks that the class is correct."""
        return load(cls, filepath)

    def __repr__(self) -> str:
        config = self._config()
        config.pop("seed", None)
        diff = ngtools.different_from_defaults(self, config)
        params = ", ".join(f"{x}={y!r}" for x, y in sorted(diff.items()))
        return f"{self.name}({params})"
