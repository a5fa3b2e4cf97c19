#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `frostlib.bech32` module."

import pytest

from frostlib.bech32 import (
    b32decode,
    b32encode,
    decode,
    encode,
    power_of_2_base_conversion,
)
from frostlib.exceptions import FROSTlibValueError


def test_bip173_valid() -> None:
    # https://github.com/bitcoin/bips/blob/master/bip-0173.mediawiki
    valid_checksums = [
        "A12UEL5L",
        "a12uel5l",
        "an83characterlonghumanreadablepartthatcontainsthenumber1andtheexcludedcharactersbio1tt5tgs",
        "abcdef1qpzry9x8gf2tvdw0s3jn54khce6mua7lmqqqxw",
        "11" + "q" * 82 + "c8247j",
        "split1checkupstagehandshakeupstreamerranterredcaperred2y9e3w",
    ]
    for test in valid_checksums:
        hrp, data = b32decode(test)
        assert b32encode(hrp, data) == test.lower()
        assert b32decode(test.encode("ascii")) == (hrp, data)


def test_bip173_invalid() -> None:
    invalid_checksums = [
        (" 1nwldj5", "empty HRP: "),
        ("\x7f1axkwrx", r"ASCII character outside \[33-126\]"),
        ("pzry9x0s0muk", "missing HRP: "),
        ("1pzry9x0s0muk", "empty HRP: "),
        ("x1b4n0q5v", "invalid data characters: "),
        ("li1dgmt3", "too short checksum: "),
        ("A1G7SGD8", "invalid checksum: "),
        ("a12UEL5L", "mixed case: "),
    ]
    for test, err_msg in invalid_checksums:
        with pytest.raises(FROSTlibValueError, match=err_msg):
            b32decode(test)


def test_power_of_2_base_conversion() -> None:
    assert power_of_2_base_conversion([0xFF], 8, 5) == [31, 28]
    assert power_of_2_base_conversion([31, 28], 5, 8, False) == [0xFF]

    with pytest.raises(FROSTlibValueError, match="invalid value: "):
        power_of_2_base_conversion([256], 8, 5)
    with pytest.raises(FROSTlibValueError, match="non-zero padding bits"):
        power_of_2_base_conversion([31, 29], 5, 8, False)
    with pytest.raises(FROSTlibValueError, match="too many padding bits: "):
        power_of_2_base_conversion([31, 28, 0], 5, 8, False)


def test_payload() -> None:
    payload = bytes(range(33))
    bech = encode("frost", payload)
    assert bech.startswith("frost1")
    assert decode(bech) == ("frost", payload)
    assert decode(bech.upper()) == ("frost", payload)

    with pytest.raises(FROSTlibValueError, match="empty HRP"):
        encode(" ", payload)
