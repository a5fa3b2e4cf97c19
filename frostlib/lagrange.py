#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Lagrange interpolation at x = 0 over the scalar field.

    lambda_i = prod_{j != i} j / (j - i)  (mod n)

The coefficient depends only on the participant index and on
the index set: it carries no secret and it is memoized.
"""

from functools import lru_cache
from typing import Iterable, Tuple

from frostlib.curve import Curve, secp256k1
from frostlib.exceptions import DegenerateInterpolationError, FROSTlibValueError
from frostlib.number_theory import mod_inv


@lru_cache(maxsize=1024)
def _lagrange_coefficient(i: int, indices: Tuple[int, ...], n: int) -> int:
    # indices are sorted, unique, and in 1..n-1
    num = 1
    den = 1
    for j in indices:
        if j == i:
            continue
        num = num * j % n
        den = den * (j - i) % n
    try:
        return num * mod_inv(den, n) % n
    except FROSTlibValueError as e:
        raise DegenerateInterpolationError("non-invertible denominator") from e


def lagrange_coefficient(
    participant_index: int, indices: Iterable[int], ec: Curve = secp256k1
) -> int:
    """Return the Lagrange coefficient of participant_index at x = 0.

    Interpolation is undefined, and DegenerateInterpolationError is raised,
    if the index set is empty, has duplicates or indices not in 1..n-1,
    or does not include participant_index.
    """

    indices = list(indices)
    if not indices:
        raise DegenerateInterpolationError("empty index set")
    if len(set(indices)) != len(indices):
        raise DegenerateInterpolationError(f"duplicate indices: {sorted(indices)}")
    for j in indices:
        if not 0 < j < ec.n:
            raise DegenerateInterpolationError(f"invalid index: {j}")
    if participant_index not in indices:
        err_msg = f"index {participant_index} not in {sorted(indices)}"
        raise DegenerateInterpolationError(err_msg)

    return _lagrange_coefficient(participant_index, tuple(sorted(indices)), ec.n)
