# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import inspect
import typing as tp
import numpy as np


def different_from_defaults(instance: tp.Any, instance_dict: tp.Dict[str, tp.Any]) -> tp.Dict[str, tp.Any]:
    """Returns the init arguments of an instance which differ from the default
    values of its class signature

    Parameters
    ----------
    instance: object
        the object whose class signature provides the defaults
    instance_dict: dict
        the values of the init arguments for this instance

    Note
    ----
    This is convenient for short repr of data structures.
    Arguments without default (or absent from instance_dict) are ignored.
    """
    defaults = {
        x: y.default
        for x, y in inspect.signature(instance.__class__.__init__).parameters.items()
        if x not in ["self", "__class__"] and y.default is not inspect.Parameter.empty
    }
    return {
        x: instance_dict[x] for x, y in defaults.items() if x in instance_dict and not _equal(y, instance_dict[x])
    }


def _equal(first: tp.Any, second: tp.Any) -> bool:
    if first is None or second is None:
        return first is second
    if isinstance(first, float) and isinstance(second, float) and np.isnan(first) and np.isnan(second):
        return True
    return bool(first == second)
