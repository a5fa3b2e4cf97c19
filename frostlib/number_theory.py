#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Modular arithmetic functions.

Only what the curves in use require is provided:
modular inverse (Lagrange denominators, Jacobian normalization)
and modular square root for primes p = 3 mod 4 or p = 5 mod 8
(point decompression).
"""

from typing import Tuple

from frostlib.exceptions import FROSTlibValueError
from frostlib.utils import int_repr


def xgcd(a: int, b: int) -> Tuple[int, int, int]:
    """Return (g, x, y) such that a*x + b*y = g = gcd(a, b).

    Extended Euclidean Algorithm.
    """

    x0, x1, y0, y1 = 0, 1, 1, 0
    while a != 0:
        q, b, a = b // a, a, b % a
        y0, y1 = y1, y0 - q * y1
        x0, x1 = x1, x0 - q * x1
    return b, x0, y0


def mod_inv(a: int, m: int) -> int:
    "Return the inverse of a (mod m). m does not have to be a prime."

    a %= m
    g, x, _ = xgcd(a, m)
    if g == 1:
        return x % m
    raise FROSTlibValueError(f"no inverse for {int_repr(a)} mod {int_repr(m)}")


def mod_sqrt(a: int, p: int) -> int:
    """Return a square root (mod p) of a; p must be a prime.

    Solve the equation:
        x^2 = a mod p

    and return x. Note that p - x is also a root.
    """

    a %= p

    if p % 4 == 3:  # secp256k1 and P-256 case
        r = pow(a, (p >> 2) + 1, p)
    elif p % 8 == 5:
        r = pow(a, (p >> 3) + 1, p)
        if r * r % p != a:
            r = r * pow(2, p >> 2, p) % p
    else:
        raise FROSTlibValueError(f"unsupported prime for square root: {int_repr(p)}")

    if r * r % p != a:
        raise FROSTlibValueError(f"no root for {int_repr(a)} mod {int_repr(p)}")
    return r
