# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp
import numpy as np
from . import tools


class _Configured:
    # pylint: disable=unused-argument
    def __init__(self, required: int, rate: tp.Optional[float] = None, tol: float = 1e-6, flag: bool = False) -> None:
        pass


def test_different_from_defaults() -> None:
    inst = _Configured(3)
    output = tools.different_from_defaults(inst, dict(required=3, rate=None, tol=1e-3, flag=False))
    np.testing.assert_equal(output, {"tol": 1e-3})
    output = tools.different_from_defaults(inst, dict(rate=0.5, flag=True))
    np.testing.assert_equal(output, {"rate": 0.5, "flag": True})
    output = tools.different_from_defaults(inst, {})
    np.testing.assert_equal(output, {})
