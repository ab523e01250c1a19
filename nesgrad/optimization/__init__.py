# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .base import Algorithm  # abstract class, for type checking
from .base import registry
from .population import Population
from .distribution import SearchDistribution
from .xnes import XNES
