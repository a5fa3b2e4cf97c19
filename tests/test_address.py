#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `frostlib.address` module."

import pytest

from frostlib.address import (
    address_equals,
    derive_address,
    encode_address,
    point_from_address,
)
from frostlib.alias import INF
from frostlib.bech32 import encode
from frostlib.ciphersuite import CIPHERSUITES, FROST_SECP256K1
from frostlib.curve import mult, secp256k1
from frostlib.exceptions import FROSTlibValueError
from frostlib.primitives import h_addr


def test_derive_address() -> None:
    pk_sig = mult(2)
    pr_sig = mult(3)
    h = h_addr([pk_sig[0], pr_sig[0]])
    assert derive_address(pk_sig, pr_sig) == mult(5 + h)

    # pk_sig and pr_sig are not interchangeable
    assert derive_address(pr_sig, pk_sig) != derive_address(pk_sig, pr_sig)
    # the address depends on both components
    assert derive_address(pk_sig, mult(4)) != derive_address(pk_sig, pr_sig)
    minus_pk_sig = mult(secp256k1.n - 2)
    assert derive_address(minus_pk_sig, pr_sig) != derive_address(pk_sig, pr_sig)


def test_invalid_components() -> None:
    with pytest.raises(FROSTlibValueError, match="signature public key is the inf"):
        derive_address(INF, mult(3))
    with pytest.raises(FROSTlibValueError, match="secondary public component not"):
        derive_address(mult(2), (1, 1))
    with pytest.raises(FROSTlibValueError, match="address not on curve"):
        encode_address((1, 1))


def test_encoding() -> None:
    for suite in CIPHERSUITES.values():
        ec = suite.curve
        A = derive_address(mult(7, ec.G, ec), mult(11, ec.G, ec), suite)
        addr = encode_address(A, suite)
        assert addr.startswith(suite.hrp + "1")
        assert point_from_address(addr, suite) == A
        assert point_from_address(addr.encode("ascii"), suite) == A
        assert point_from_address(A, suite) == A
        assert address_equals(addr, A, suite)
        assert address_equals(addr.upper(), addr, suite)


def test_wrong_hrp() -> None:
    A = derive_address(mult(7), mult(11))
    addr = encode_address(A)
    testnet = CIPHERSUITES["FROST-secp256k1-SHA256-testnet"]
    with pytest.raises(FROSTlibValueError, match="invalid hrp: "):
        point_from_address(addr, testnet)

    # same point, different network: not the same address string
    assert encode_address(A, testnet) != addr


def test_invalid_payload() -> None:
    with pytest.raises(FROSTlibValueError, match="invalid size: "):
        point_from_address(encode(FROST_SECP256K1.hrp, b"\x02" * 20))
    with pytest.raises(FROSTlibValueError):
        point_from_address("frost1qqqqqq")
