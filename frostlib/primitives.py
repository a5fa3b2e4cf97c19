#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Primitive engine shared by every participant and the verifier.

Embedding of small integers in the base and scalar fields,
canonical x-coordinate extraction, message to field elements,
uniform scalar sampling, and the four domain separated hashes:

* h_msg: message to a single field element
* h1: binding factor hash-to-scalar (low arity)
* h2: challenge hash-to-scalar (high arity)
* h_addr: address derivation hash-to-scalar

All of them are parameterized by a Ciphersuite:
two parties using different ciphersuites
compute unrelated values and their signatures do not verify.
"""

import secrets
from typing import List, Optional, Sequence

from frostlib.alias import Octets, Point, RandomBytes
from frostlib.ciphersuite import FROST_SECP256K1, Ciphersuite
from frostlib.curve import Curve, secp256k1
from frostlib.exceptions import PrimitiveFailureError, RandomnessExhaustedError
from frostlib.hashes import hash_to_field, hash_to_scalar
from frostlib.utils import bytes_from_octets, int_from_bits

# rejection sampling attempts before giving up on the randomness source
MAX_SAMPLING_ATTEMPTS = 64


def field_from_int(i: int, ec: Curve = secp256k1) -> int:
    return i % ec.p


def scalar_from_int(i: int, ec: Curve = secp256k1) -> int:
    return i % ec.n


def x_coordinate(Q: Point, ec: Curve = secp256k1) -> int:
    "Return the canonical x-coordinate of a curve point."
    ec.require_on_curve(Q)
    if Q[1] == 0:
        raise PrimitiveFailureError("infinity point has no x-coordinate")
    return Q[0]


def fields_from_msg(msg: Octets, ec: Curve = secp256k1) -> List[int]:
    """Return the message as a sequence of field elements.

    The first element is the message length in bytes,
    followed by the message split in big-endian chunks
    of p_size - 1 bytes, so that every chunk is smaller than p.
    """

    msg = bytes_from_octets(msg)
    chunk_size = ec.p_size - 1
    fields = [field_from_int(len(msg), ec)]
    for i in range(0, len(msg), chunk_size):
        chunk = msg[i : i + chunk_size]
        fields.append(int.from_bytes(chunk, byteorder="big", signed=False))
    return fields


def random_scalar(rng: Optional[RandomBytes] = None, ec: Curve = secp256k1) -> int:
    """Return a uniformly random scalar in [1, n-1].

    Rejection sampling over ec.n_size random bytes from rng,
    secrets.token_bytes being the default randomness source.
    """

    rng = rng or secrets.token_bytes
    for _ in range(MAX_SAMPLING_ATTEMPTS):
        try:
            buf = rng(ec.n_size)
        except OSError as e:
            raise RandomnessExhaustedError("randomness source failure") from e
        if len(buf) != ec.n_size:
            err_msg = "randomness source returned "
            err_msg += f"{len(buf)} bytes instead of {ec.n_size}"
            raise RandomnessExhaustedError(err_msg)
        q = int_from_bits(buf, ec.nlen)
        if 0 < q < ec.n:
            return q
    err_msg = f"no valid scalar in {MAX_SAMPLING_ATTEMPTS} attempts"
    raise RandomnessExhaustedError(err_msg)


def h_msg(msg: Octets, suite: Ciphersuite = FROST_SECP256K1) -> int:
    "Hash a message to a single field element."
    ec = suite.curve
    fields = fields_from_msg(msg, ec)
    return hash_to_field(suite.message_tag, fields, suite.binding_rate, ec, suite.hf)


def h1(fields: Sequence[int], suite: Ciphersuite = FROST_SECP256K1) -> int:
    "Binding factor hash-to-scalar."
    return hash_to_scalar(
        suite.binding_tag, fields, suite.binding_rate, suite.curve, suite.hf
    )


def h2(fields: Sequence[int], suite: Ciphersuite = FROST_SECP256K1) -> int:
    "Challenge hash-to-scalar."
    return hash_to_scalar(
        suite.challenge_tag, fields, suite.challenge_rate, suite.curve, suite.hf
    )


def h_addr(fields: Sequence[int], suite: Ciphersuite = FROST_SECP256K1) -> int:
    "Address derivation hash-to-scalar."
    return hash_to_scalar(
        suite.address_tag, fields, suite.binding_rate, suite.curve, suite.hf
    )
