#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Schnorr signatures over compute keys.

A signature is the (challenge, response) scalar pair
together with the ComputeKey (pk_sig, pr_sig) of the signer.
The challenge is

    c = H2(x(R), x(pk_sig), x(pr_sig), x(A), message fields)

where R is the nonce commitment and A is the address derived
from the compute key; the response is

    s = k - c*sk_sig

Verification recomputes R' = s*G + c*pk_sig and the challenge c':
the signature is valid if c' equals c and the address derived
from the compute key is the expected one.

Threshold signatures produced by frostlib.frost
are verified exactly as single-signer ones:
the verifier needs no knowledge of participants or threshold.
"""

import logging
from dataclasses import InitVar, dataclass, field
from typing import Optional, Type, TypeVar, Union

from dataclasses_json import DataClassJsonMixin, config

from frostlib.address import Address, address_equals
from frostlib.alias import Octets, Point, RandomBytes
from frostlib.ciphersuite import FROST_SECP256K1, Ciphersuite
from frostlib.curve import Curve, double_mult, mult, secp256k1
from frostlib.exceptions import FROSTlibRuntimeError, FROSTlibValueError
from frostlib.keys import ComputeKey, PrivateKey
from frostlib.primitives import fields_from_msg, h2, random_scalar, x_coordinate
from frostlib.sec_point import bytes_from_point, point_from_octets
from frostlib.utils import (
    bytes_from_octets,
    hex_string,
    int_from_integer,
    int_repr,
)

_logger = logging.getLogger(__name__)

_Sig = TypeVar("_Sig", bound="Sig")


@dataclass(frozen=True)
class Sig(DataClassJsonMixin):
    """Schnorr signature.

    - challenge is a scalar, 0 < c < ec.n (hash to scalar is never zero)
    - response is a scalar, 0 <= s < ec.n
    - compute_key is the signer (pk_sig, pr_sig) public pair
    """

    challenge: int = field(
        metadata=config(encoder=hex_string, decoder=int_from_integer)
    )
    response: int = field(
        metadata=config(encoder=hex_string, decoder=int_from_integer)
    )
    compute_key: ComputeKey
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()

    @property
    def ec(self) -> Curve:
        return self.compute_key.ec

    def assert_valid(self) -> None:
        if not 0 < self.challenge < self.ec.n:
            raise FROSTlibValueError(
                f"challenge not in 1..n-1: {int_repr(self.challenge)}"
            )
        if not 0 <= self.response < self.ec.n:
            raise FROSTlibValueError(
                f"response not in 0..n-1: {int_repr(self.response)}"
            )
        self.compute_key.assert_valid()

    def serialize(self, check_validity: bool = True) -> bytes:
        "Return challenge || response || SEC(pk_sig) || SEC(pr_sig)."
        if check_validity:
            self.assert_valid()

        ec = self.ec
        out = self.challenge.to_bytes(ec.n_size, byteorder="big", signed=False)
        out += self.response.to_bytes(ec.n_size, byteorder="big", signed=False)
        out += bytes_from_point(self.compute_key.pk_sig, ec)
        out += bytes_from_point(self.compute_key.pr_sig, ec)
        return out

    @classmethod
    def parse(
        cls: Type[_Sig], data: Octets, ec: Curve = secp256k1, check_validity: bool = True
    ) -> _Sig:
        data = bytes_from_octets(data, 2 * ec.n_size + 2 * (ec.p_size + 1))

        i = ec.n_size
        challenge = int.from_bytes(data[:i], byteorder="big", signed=False)
        response = int.from_bytes(data[i : 2 * i], byteorder="big", signed=False)
        j = 2 * i + ec.p_size + 1
        pk_sig = point_from_octets(data[2 * i : j], ec)
        pr_sig = point_from_octets(data[j:], ec)
        compute_key = ComputeKey(pk_sig, pr_sig, ec, check_validity)
        return cls(challenge, response, compute_key, check_validity)


def challenge_(
    R: Point,
    compute_key: ComputeKey,
    address: Point,
    msg: Octets,
    suite: Ciphersuite = FROST_SECP256K1,
) -> int:
    "Return the challenge scalar binding nonce, signer, address, and message."

    ec = suite.curve
    fields = [
        x_coordinate(R, ec),
        x_coordinate(compute_key.pk_sig, ec),
        x_coordinate(compute_key.pr_sig, ec),
        x_coordinate(address, ec),
    ]
    fields += fields_from_msg(msg, ec)
    return h2(fields, suite)


def sign(
    msg: Octets,
    prv_key: PrivateKey,
    rng: Optional[RandomBytes] = None,
    suite: Ciphersuite = FROST_SECP256K1,
    logger: Optional[logging.Logger] = None,
) -> Sig:
    """Sign the message with a single-party private key.

    The nonce k is sampled from rng, secrets.token_bytes by default.
    """
    logger = logger or _logger
    ec = suite.curve
    if prv_key.ec is not ec:
        raise FROSTlibValueError(f"curve mismatch: {prv_key.ec.name}")

    compute_key = prv_key.compute_key
    address = compute_key.address(suite)

    k = random_scalar(rng, ec)
    R = mult(k, ec.G, ec)
    c = challenge_(R, compute_key, address, msg, suite)
    s = (k - c * prv_key.sk_sig) % ec.n
    logger.debug("signed with challenge %s", hex_string(c))
    return Sig(c, s, compute_key)


def assert_as_valid(
    msg: Octets,
    address: Address,
    sig: Union[Sig, Octets],
    suite: Ciphersuite = FROST_SECP256K1,
) -> None:
    # It raises Errors, while verify should always return True or False
    ec = suite.curve
    if isinstance(sig, Sig):
        sig.assert_valid()
        if sig.ec is not ec:
            raise FROSTlibValueError(f"curve mismatch: {sig.ec.name}")
    else:
        sig = Sig.parse(sig, ec)

    compute_key = sig.compute_key
    derived_address = compute_key.address(suite)

    # R' = s*G + c*pk_sig
    R = double_mult(sig.response, ec.G, sig.challenge, compute_key.pk_sig, ec)
    c = challenge_(R, compute_key, derived_address, msg, suite)
    if c != sig.challenge:
        raise FROSTlibRuntimeError("signature verification failed")

    if not address_equals(address, derived_address, suite):
        raise FROSTlibRuntimeError("address mismatch")


def verify(
    msg: Octets,
    address: Address,
    sig: Union[Sig, Octets],
    suite: Ciphersuite = FROST_SECP256K1,
) -> bool:
    """Verify the signature of the provided message against the address."""
    # all kind of Exceptions are catched because
    # verify must always return a bool
    try:
        assert_as_valid(msg, address, sig, suite)
    except Exception:  # pylint: disable=broad-except
        return False

    return True
