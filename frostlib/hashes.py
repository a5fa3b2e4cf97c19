#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Hash based helper functions.

Tagged hashes are BIP340-style: hf(hf(tag) || hf(tag) || m).

Hashing a sequence of field elements is done with a fixed arity (rate):
the preimage is the number of elements, then the elements themselves
zero-padded to a multiple of the rate, every element serialized
on p_size bytes. The length prefix keeps padded and unpadded
sequences distinct.
"""

import hashlib
from typing import Dict, Sequence

from frostlib.alias import HashF
from frostlib.curve import Curve, secp256k1
from frostlib.exceptions import FROSTlibValueError, PrimitiveFailureError
from frostlib.utils import int_from_bits

HASH_FUNCTIONS: Dict[str, HashF] = {
    "sha256": hashlib.sha256,
    "sha512": hashlib.sha512,
    "sha3_256": hashlib.sha3_256,
}

# size of the element count in a field-sequence preimage
_COUNT_SIZE = 8


def tagged_hash(tag: bytes, m: bytes, hf: HashF = hashlib.sha256) -> bytes:
    h1 = hf()
    h1.update(tag)
    tag_hash = h1.digest()

    h2 = hf()
    h2.update(tag_hash + tag_hash)
    h2.update(m)
    return bytes(h2.digest())


def serialize_fields(fields: Sequence[int], rate: int, ec: Curve = secp256k1) -> bytes:
    "Return the rate-padded preimage of a sequence of field elements."

    if rate < 1:
        raise FROSTlibValueError(f"invalid rate: {rate}")

    count = len(fields)
    padded = list(fields) + [0] * (-count % rate)

    preimage = count.to_bytes(_COUNT_SIZE, byteorder="big", signed=False)
    for f in padded:
        if not 0 <= f < ec.p:
            raise FROSTlibValueError(f"not a field element: {f}")
        preimage += f.to_bytes(ec.p_size, byteorder="big", signed=False)
    return preimage


def hash_to_field(
    tag: bytes,
    fields: Sequence[int],
    rate: int,
    ec: Curve = secp256k1,
    hf: HashF = hashlib.sha256,
) -> int:
    "Hash a sequence of field elements to a field element."

    h = tagged_hash(tag, serialize_fields(fields, rate, ec), hf)
    return int.from_bytes(h, byteorder="big", signed=False) % ec.p


def hash_to_scalar(
    tag: bytes,
    fields: Sequence[int],
    rate: int,
    ec: Curve = secp256k1,
    hf: HashF = hashlib.sha256,
) -> int:
    """Hash a sequence of field elements to a non-zero scalar.

    The leftmost nlen bits of the digest are reduced mod n:
    a zero result is a primitive failure, not a valid scalar.
    """

    h = tagged_hash(tag, serialize_fields(fields, rate, ec), hf)
    c = int_from_bits(h, ec.nlen) % ec.n
    if c == 0:
        raise PrimitiveFailureError("hash to scalar returned zero")
    return c
