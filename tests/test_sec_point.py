#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `frostlib.sec_point` module."

import pytest

from frostlib.alias import INF
from frostlib.curve import CURVES, mult, secp256k1
from frostlib.exceptions import FROSTlibValueError
from frostlib.sec_point import bytes_from_point, point_from_octets


def test_generator() -> None:
    G_compressed = "0279BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798"
    assert bytes_from_point(secp256k1.G).hex().upper() == G_compressed
    assert point_from_octets(G_compressed) == secp256k1.G

    G_uncompressed = bytes_from_point(secp256k1.G, compressed=False)
    assert len(G_uncompressed) == 65
    assert G_uncompressed[0] == 0x04
    assert point_from_octets(G_uncompressed) == secp256k1.G


def test_both_parities() -> None:
    for ec in set(CURVES.values()):
        for q in (1, 2, 3, 4, ec.n - 1, ec.n - 2):
            Q = mult(q, ec.G, ec)
            for compressed in (True, False):
                sec_bytes = bytes_from_point(Q, ec, compressed)
                assert point_from_octets(sec_bytes, ec) == Q
                assert point_from_octets(sec_bytes.hex(), ec) == Q


def test_exceptions() -> None:
    ec = secp256k1
    with pytest.raises(FROSTlibValueError, match="no bytes representation for inf"):
        bytes_from_point(INF)

    with pytest.raises(FROSTlibValueError, match="invalid size: "):
        point_from_octets(b"\x02" + b"\x01" * 31)

    # 5 is not a valid x-coordinate in secp256k1
    sec_bytes = b"\x02" + (5).to_bytes(ec.p_size, "big")
    with pytest.raises(FROSTlibValueError, match="invalid x-coordinate: "):
        point_from_octets(sec_bytes)

    sec_bytes = bytes_from_point(ec.G, compressed=False)
    with pytest.raises(FROSTlibValueError, match="invalid size for compressed point"):
        point_from_octets(b"\x02" + sec_bytes[1:])
    with pytest.raises(FROSTlibValueError, match="point not on curve"):
        point_from_octets(sec_bytes[:-1] + bytes([sec_bytes[-1] ^ 1]))
    with pytest.raises(FROSTlibValueError, match="not a point: "):
        point_from_octets(b"\x05" + sec_bytes[1:])

    sec_bytes = bytes_from_point(ec.G)
    with pytest.raises(FROSTlibValueError, match="invalid size for uncompressed point"):
        point_from_octets(b"\x04" + sec_bytes[1:])
