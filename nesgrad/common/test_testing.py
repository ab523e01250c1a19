# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp
import numpy as np
from . import testing


def test_printed_assert_equal() -> None:
    testing.printed_assert_equal(0, 0)
    np.testing.assert_raises(AssertionError, testing.printed_assert_equal, 0, 1)


@testing.parametrized(
    inside=([[0.0, 1.0], [-1.0, 2.0]], None),
    on_bounds=([[-1.0, 2.0]], None),
    outside=([[0.0, 1.0], [0.0, 2.5], [-3.0, 0.0]], "rows [1, 2]"),
)
def test_assert_within_bounds(points: tp.List[tp.List[float]], message: tp.Optional[str]) -> None:
    try:
        testing.assert_within_bounds(points, [-1, 0], [1, 2])
    except AssertionError as error:
        if message is None:
            raise AssertionError("An error has been raised while it should not.")
        assert message in error.args[0], f"Unexpected message: {error.args[0]}"
    else:
        if message is not None:
            raise AssertionError("An error should have been raised.")


@testing.parametrized(
    single=(3, 4),
    other=(12, 13),
)
def test_parametrized(value: int, expected: int) -> None:
    np.testing.assert_equal(value + 1, expected)
