#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""SEC compressed/uncompressed point representation.

SEC 1 v.2, sections 2.3.3 and 2.3.4.
Commitments, compute keys, and addresses travel as compressed points.
"""

from frostlib.alias import Octets, Point
from frostlib.curve import Curve, secp256k1
from frostlib.exceptions import FROSTlibValueError
from frostlib.utils import bytes_from_octets, hex_string


def bytes_from_point(Q: Point, ec: Curve = secp256k1, compressed: bool = True) -> bytes:
    """Return a point as compressed/uncompressed octet sequence.

    The infinity point has no representation and it is rejected.
    """

    ec.require_on_curve(Q)
    if Q[1] == 0:
        raise FROSTlibValueError("no bytes representation for infinity point")

    x_bytes = Q[0].to_bytes(ec.p_size, byteorder="big", signed=False)
    if not compressed:
        y_bytes = Q[1].to_bytes(ec.p_size, byteorder="big", signed=False)
        return b"\x04" + x_bytes + y_bytes
    prefix = b"\x03" if Q[1] & 1 else b"\x02"
    return prefix + x_bytes


def point_from_octets(sec_bytes: Octets, ec: Curve = secp256k1) -> Point:
    "Return the curve point encoded by the input SEC octets."

    compressed_size = ec.p_size + 1
    uncompressed_size = 2 * ec.p_size + 1
    sec_bytes = bytes_from_octets(sec_bytes, (compressed_size, uncompressed_size))

    size = len(sec_bytes)
    prefix = sec_bytes[0]
    if prefix in (0x02, 0x03):
        if size != compressed_size:
            err_msg = "invalid size for compressed point: "
            err_msg += f"{size} instead of {compressed_size}"
            raise FROSTlibValueError(err_msg)
        x_Q = int.from_bytes(sec_bytes[1:], byteorder="big", signed=False)
        try:
            y_Q = ec.y_even(x_Q)
        except FROSTlibValueError as e:
            err_msg = f"invalid x-coordinate: '{hex_string(x_Q)}'"
            raise FROSTlibValueError(err_msg) from e
        return x_Q, y_Q if prefix == 0x02 else ec.p - y_Q

    if prefix == 0x04:
        if size != uncompressed_size:
            err_msg = "invalid size for uncompressed point: "
            err_msg += f"{size} instead of {uncompressed_size}"
            raise FROSTlibValueError(err_msg)
        x_Q = int.from_bytes(sec_bytes[1:compressed_size], byteorder="big")
        y_Q = int.from_bytes(sec_bytes[compressed_size:], byteorder="big")
        if y_Q == 0:
            raise FROSTlibValueError("no bytes representation for infinity point")
        if not ec.is_on_curve((x_Q, y_Q)):
            raise FROSTlibValueError("point not on curve")
        return x_Q, y_Q

    raise FROSTlibValueError(f"not a point: {sec_bytes!r}")
