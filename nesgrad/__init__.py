# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .common import typing as typing
from .common import errors as errors
from .functions import Problem as Problem
from .functions import corefuncs as corefuncs
from .optimization import Population as Population
from .optimization import XNES as XNES
from .optimization import registry as algorithms


__all__ = ["Problem", "Population", "XNES", "algorithms", "corefuncs", "errors", "typing"]


__version__ = "0.1.0"
