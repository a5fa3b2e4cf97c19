#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Address derivation and encoding.

The address of a compute key (pk_sig, pr_sig) is the curve point

    A = pk_sig + pr_sig + h_addr(x(pk_sig), x(pr_sig))*G

where pk_sig is the signature public key
and pr_sig is the secondary public component.
It is bech32 encoded as the SEC compressed representation of A,
the human readable part being set by the ciphersuite.
"""

from typing import Union

from frostlib.alias import Point, String
from frostlib.bech32 import decode, encode
from frostlib.ciphersuite import FROST_SECP256K1, Ciphersuite
from frostlib.curve import mult
from frostlib.exceptions import FROSTlibValueError
from frostlib.primitives import h_addr, x_coordinate
from frostlib.sec_point import bytes_from_point, point_from_octets

# an address is either its curve point or its bech32 encoding
Address = Union[Point, String]


def _require_valid_point(Q: Point, suite: Ciphersuite, name: str) -> None:
    ec = suite.curve
    if len(Q) != 2 or not ec.is_on_curve(Q):
        raise FROSTlibValueError(f"{name} not on curve")
    if Q[1] == 0:
        raise FROSTlibValueError(f"{name} is the infinity point")


def derive_address(
    pk_sig: Point, pr_sig: Point, suite: Ciphersuite = FROST_SECP256K1
) -> Point:
    "Return the address point of the (pk_sig, pr_sig) compute key."

    _require_valid_point(pk_sig, suite, "signature public key")
    _require_valid_point(pr_sig, suite, "secondary public component")

    ec = suite.curve
    fields = [x_coordinate(pk_sig, ec), x_coordinate(pr_sig, ec)]
    h = h_addr(fields, suite)
    A = ec.add(ec.add(pk_sig, pr_sig), mult(h, ec.G, ec))
    if A[1] == 0:
        raise FROSTlibValueError("address is the infinity point")
    return A


def encode_address(A: Point, suite: Ciphersuite = FROST_SECP256K1) -> str:
    "Return the bech32 encoding of the address point."
    _require_valid_point(A, suite, "address")
    return encode(suite.hrp, bytes_from_point(A, suite.curve))


def point_from_address(addr: Address, suite: Ciphersuite = FROST_SECP256K1) -> Point:
    "Return the address point, decoding it if bech32 encoded."

    if isinstance(addr, tuple):
        _require_valid_point(addr, suite, "address")
        return addr

    hrp, payload = decode(addr)
    if hrp != suite.hrp:
        raise FROSTlibValueError(f"invalid hrp: {hrp} instead of {suite.hrp}")
    return point_from_octets(payload, suite.curve)


def address_equals(a: Address, b: Address, suite: Ciphersuite = FROST_SECP256K1) -> bool:
    return point_from_address(a, suite) == point_from_address(b, suite)
