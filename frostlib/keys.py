#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Account keys.

An account is controlled by a PrivateKey made of two scalars:
sk_sig, the signature private key,
and r_sig, the randomizer of the secondary public component.
The corresponding ComputeKey is the public pair

    (pk_sig, pr_sig) = (sk_sig*G, r_sig*G)

from which the account address is derived.
Signatures carry the ComputeKey, so that the verifier
can check it against the expected address.
"""

from dataclasses import InitVar, dataclass, field
from typing import Optional, Tuple

from dataclasses_json import DataClassJsonMixin, config

from frostlib.address import derive_address
from frostlib.alias import Point, RandomBytes
from frostlib.ciphersuite import FROST_SECP256K1, Ciphersuite
from frostlib.curve import CURVES, Curve, mult, secp256k1
from frostlib.exceptions import FROSTlibValueError
from frostlib.primitives import random_scalar
from frostlib.utils import hex_strings_from_point, int_repr, point_from_hex_strings


def _require_suite_curve(ec: Curve, suite: Ciphersuite) -> None:
    if ec is not suite.curve:
        err_msg = f"curve mismatch: {ec.name} instead of {suite.curve.name}"
        raise FROSTlibValueError(err_msg)


@dataclass(frozen=True)
class ComputeKey(DataClassJsonMixin):
    # signature public key
    pk_sig: Point = field(
        metadata=config(encoder=hex_strings_from_point, decoder=point_from_hex_strings)
    )
    # secondary public component
    pr_sig: Point = field(
        metadata=config(encoder=hex_strings_from_point, decoder=point_from_hex_strings)
    )
    ec: Curve = field(
        default=secp256k1,
        repr=False,
        metadata=config(encoder=lambda v: v.name, decoder=CURVES.__getitem__),
    )
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:
        for name in ("pk_sig", "pr_sig"):
            Q = getattr(self, name)
            if not self.ec.is_on_curve(Q):
                raise FROSTlibValueError(f"{name} not on curve")
            if Q[1] == 0:
                raise FROSTlibValueError(f"{name} is the infinity point")

    def address(self, suite: Ciphersuite = FROST_SECP256K1) -> Point:
        "Return the address point derived from this compute key."
        _require_suite_curve(self.ec, suite)
        return derive_address(self.pk_sig, self.pr_sig, suite)


@dataclass(frozen=True)
class PrivateKey:
    # signature private key
    sk_sig: int = field(repr=False)
    # secondary component randomizer
    r_sig: int = field(repr=False)
    ec: Curve = field(default=secp256k1, repr=False)
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:
        for name in ("sk_sig", "r_sig"):
            q = getattr(self, name)
            if not 0 < q < self.ec.n:
                raise FROSTlibValueError(f"{name} not in 1..n-1: {int_repr(q)}")

    @property
    def compute_key(self) -> ComputeKey:
        pk_sig = mult(self.sk_sig, ec=self.ec)
        pr_sig = mult(self.r_sig, ec=self.ec)
        return ComputeKey(pk_sig, pr_sig, self.ec)


def gen_keys(
    rng: Optional[RandomBytes] = None, suite: Ciphersuite = FROST_SECP256K1
) -> Tuple[PrivateKey, ComputeKey]:
    """Return a random (PrivateKey, ComputeKey) pair."""
    ec = suite.curve
    prv_key = PrivateKey(random_scalar(rng, ec), random_scalar(rng, ec), ec)
    return prv_key, prv_key.compute_key
