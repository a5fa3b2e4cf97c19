#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Assorted conversion utilities.

Octets/integer conversions follow SEC 1 v.2 2.3.

https://www.secg.org/sec1-v2.pdf
"""

from collections.abc import Iterable as IterableCollection
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from frostlib.alias import Integer, Octets
from frostlib.exceptions import FROSTlibValueError

NoneOneOrMoreInt = Optional[Union[int, Iterable[int]]]

HEX_THRESHOLD = 0xFFFFFFFF


def bytes_from_octets(octets: Octets, out_size: NoneOneOrMoreInt = None) -> bytes:
    """Return bytes from a hex-string, stripping leading/trailing spaces.

    If the input is not a string, then it goes untouched.
    Optionally, it also ensures required output size.
    """

    if isinstance(octets, str):  # hex string
        octets = bytes.fromhex(octets)

    if (
        out_size is None
        or isinstance(out_size, int)
        and len(octets) == out_size
        or isinstance(out_size, IterableCollection)
        and len(octets) in out_size
    ):
        return octets

    err_msg = f"invalid size: {len(octets)} bytes instead of {out_size}"
    raise FROSTlibValueError(err_msg)


def int_from_bits(octets: Octets, nlen: int) -> int:
    """Return the leftmost nlen bits.

    Take as input a sequence of blen bits and calculate a
    non-negative integer i that is less than 2^nlen according to
    SEC 1 v.2 section 4.1.3 (5).
    Note that an additional reduction modulo n would be required
    to ensure that 0 < i < n.
    """

    octets = bytes_from_octets(octets)
    i = int.from_bytes(octets, byteorder="big", signed=False)

    blen = len(octets) * 8  # bits
    n = (blen - nlen) if blen >= nlen else 0
    return i >> n


def int_from_integer(i: Integer) -> int:
    """Return an int from many possible integer representations.

    Allowed integer representations are:

    * 3735928559
    * "0xdeadbeef"
    * "deadbeef"
    * b'\xde\xad\xbe\xef'
    """

    if isinstance(i, int):
        return i

    if isinstance(i, str):
        i = i.strip().lower()
        if i.startswith("0x") or i.startswith("-0x"):
            return int(i, 16)
        i = bytes.fromhex(i)

    # must be bytes
    return int.from_bytes(i, "big", signed=False)


def hex_string(i: Integer) -> str:
    """Return a hex-string from many positive integer representations.

    The resulting hex-string has an even number of hex-digits and
    includes a space every four bytes (i.e. every eight hex-digits).
    """

    int_ = int_from_integer(i)
    if int_ < 0:
        raise FROSTlibValueError(f"negative integer: {int_}")
    a_str = hex(int_)[2:]
    if len(a_str) % 2 != 0:
        a_str = "0" + a_str

    indx = list(reversed(range(len(a_str), 0, -8)))
    return " ".join(a_str[max(0, i - 8) : i] for i in indx).upper()


def int_repr(i: int) -> str:
    "Return a short decimal repr for small ints, a hex_string otherwise."
    return f"'{hex_string(i)}'" if i > HEX_THRESHOLD else f"{i}"


def hex_strings_from_point(Q: Sequence[int]) -> List[str]:
    """Return the affine coordinates of a point as a pair of hex-strings.

    This is the JSON representation of points:
    unlike SEC octets it does not depend on the curve.
    """
    if len(Q) != 2:
        raise FROSTlibValueError("point must be a tuple[int, int]")
    return [hex_string(Q[0]), hex_string(Q[1])]


def point_from_hex_strings(coordinates: Sequence[Integer]) -> Tuple[int, int]:
    "Return the affine point from a pair of hex-strings."
    if len(coordinates) != 2:
        raise FROSTlibValueError("point must be a pair of coordinates")
    return int_from_integer(coordinates[0]), int_from_integer(coordinates[1])
