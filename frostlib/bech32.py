# Copyright (c) 2017 Pieter Wuille
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
# THE SOFTWARE.

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.


"""Bech32 encoding and decoding functions.

BIP173: https://github.com/bitcoin/bips/blob/master/bip-0173.mediawiki

Derived from https://github.com/sipa/bech32/tree/master/ref/python:

* exceptions instead of (None, None) return values
* no 90-chars limit, addresses are longer than segwit ones
* encode/decode work on bytes, doing the 8-to-5 bits conversion
"""


from typing import Iterable, List, Tuple

from frostlib.alias import String
from frostlib.exceptions import FROSTlibValueError

_ALPHABET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)
_CHECKSUM_SIZE = 6


def _polymod(values: Iterable[int]) -> int:
    "Internal function that computes the bech32 checksum."
    chk = 1
    for value in values:
        top = chk >> 25
        chk = (chk & 0x1FFFFFF) << 5 ^ value
        for i, g in enumerate(_GENERATOR):
            chk ^= g if (top >> i) & 1 else 0
    return chk


def _hrp_expand(hrp: str) -> List[int]:
    "Expand the HRP into values for checksum computation."
    return [ord(x) >> 5 for x in hrp] + [0] + [ord(x) & 31 for x in hrp]


def _create_checksum(hrp: str, data: List[int]) -> List[int]:
    values = _hrp_expand(hrp) + data + [0] * _CHECKSUM_SIZE
    polymod = _polymod(values) ^ 1
    return [(polymod >> 5 * (5 - i)) & 31 for i in range(_CHECKSUM_SIZE)]


def power_of_2_base_conversion(
    data: Iterable[int], from_bits: int, to_bits: int, pad: bool = True
) -> List[int]:
    "Convert a power-of-two digit sequence to another power-of-two base."
    acc = 0
    bits = 0
    ret = []
    maxv = (1 << to_bits) - 1
    max_acc = (1 << (from_bits + to_bits - 1)) - 1
    for value in data:
        if value < 0 or (value >> from_bits):
            raise FROSTlibValueError(f"invalid value: {value}")
        acc = ((acc << from_bits) | value) & max_acc
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            ret.append((acc >> bits) & maxv)
    if pad:
        if bits:
            ret.append((acc << (to_bits - bits)) & maxv)
    elif bits >= from_bits:
        raise FROSTlibValueError(f"too many padding bits: {bits}")
    elif (acc << (to_bits - bits)) & maxv:
        raise FROSTlibValueError("non-zero padding bits")
    return ret


def b32encode(hrp: str, data: List[int]) -> str:
    "Return the bech32 string of HRP and 5-bit data values."
    hrp = hrp.strip().lower()
    if not hrp:
        raise FROSTlibValueError("empty HRP")
    combined = data + _create_checksum(hrp, data)
    return hrp + "1" + "".join(_ALPHABET[d] for d in combined)


def b32decode(bech: String) -> Tuple[str, List[int]]:
    "Validate a bech32 string, and return HRP and 5-bit data values."

    if isinstance(bech, bytes):
        bech = bech.decode("ascii")
    bech = bech.strip()

    if not all(33 <= ord(x) <= 126 for x in bech):
        raise FROSTlibValueError(f"ASCII character outside [33-126]: {bech}")
    if bech.lower() != bech and bech.upper() != bech:
        raise FROSTlibValueError(f"mixed case: {bech}")
    bech = bech.lower()

    pos = bech.rfind("1")  # separator between hrp and data
    if pos == -1:
        raise FROSTlibValueError(f"missing HRP: {bech}")
    if pos == 0:
        raise FROSTlibValueError(f"empty HRP: {bech}")
    if pos + _CHECKSUM_SIZE + 1 > len(bech):
        raise FROSTlibValueError(f"too short checksum: {bech}")

    hrp = bech[:pos]
    if any(x not in _ALPHABET for x in bech[pos + 1 :]):
        raise FROSTlibValueError(f"invalid data characters: {bech}")
    data = [_ALPHABET.find(x) for x in bech[pos + 1 :]]

    if _polymod(_hrp_expand(hrp) + data) != 1:
        raise FROSTlibValueError(f"invalid checksum: {bech}")
    return hrp, data[:-_CHECKSUM_SIZE]


def encode(hrp: str, payload: bytes) -> str:
    "Return the bech32 string encoding the payload bytes."
    return b32encode(hrp, power_of_2_base_conversion(payload, 8, 5))


def decode(bech: String) -> Tuple[str, bytes]:
    "Return HRP and payload bytes of a bech32 string."
    hrp, data = b32decode(bech)
    return hrp, bytes(power_of_2_base_conversion(data, 5, 8, False))
