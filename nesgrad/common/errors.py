# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.


# base classes


class NesgradError(Exception):
    """Base class for error raised by nesgrad"""


class NesgradWarning(Warning):
    pass


# errors
# pylint: disable=too-many-ancestors


class NesgradValueError(ValueError, NesgradError):
    """Invalid value provided to nesgrad (eg: out of range configuration)"""


class IncompatibleProblemError(NesgradValueError):
    """The problem or population cannot be handled by the algorithm
    (eg: multiple objectives, constraints, too few individuals)
    """


# warnings


class NesgradRuntimeWarning(RuntimeWarning, NesgradWarning):
    """Runtime warning raise by nesgrad"""


class InefficientSettingsWarning(NesgradRuntimeWarning):
    """Optimization settings are not optimal for the algorithm"""
