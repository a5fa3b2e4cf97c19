#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Trusted dealer (t, n) Shamir secret sharing of a signature private key.

The dealer samples a random polynomial f of degree t-1
with f(0) equal to the secret and gives participant i the share f(i).
Any t shares determine f(0), fewer than t reveal nothing about it.

There is no verifiable secret sharing and no distributed key generation:
participants must trust the dealer.
"""

from dataclasses import InitVar, dataclass, field
from typing import Dict, List, Optional, Tuple

from frostlib.alias import Point, RandomBytes
from frostlib.curve import Curve, mult, secp256k1
from frostlib.exceptions import FROSTlibValueError
from frostlib.keys import ComputeKey
from frostlib.primitives import random_scalar
from frostlib.utils import int_repr


@dataclass(frozen=True)
class KeyShare:
    """Participant share of the group signature private key.

    It is never serialized: a share must not leave its owner.
    """

    index: int
    secret_share: int = field(repr=False)
    group_public_key: Point
    # secondary public component of the group compute key
    pr_sig: Point
    ec: Curve = field(default=secp256k1, repr=False)
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:
        if not 0 < self.index < self.ec.n:
            raise FROSTlibValueError(f"invalid participant index: {self.index}")
        if not 0 < self.secret_share < self.ec.n:
            err_msg = f"secret share not in 1..n-1: {int_repr(self.secret_share)}"
            raise FROSTlibValueError(err_msg)
        # also checks both points
        self.compute_key.assert_valid()

    @property
    def compute_key(self) -> ComputeKey:
        return ComputeKey(self.group_public_key, self.pr_sig, self.ec, False)

    @property
    def public_share(self) -> Point:
        return mult(self.secret_share, self.ec.G, self.ec)


def _polynomial_value(coefficients: List[int], x: int, n: int) -> int:
    # Horner's rule
    result = 0
    for a in reversed(coefficients):
        result = (result * x + a) % n
    return result


def generate_shares(
    n: int,
    t: int,
    secret: int,
    pr_sig: Point,
    rng: Optional[RandomBytes] = None,
    ec: Curve = secp256k1,
) -> Tuple[List[KeyShare], Dict[int, Point]]:
    """Split the secret in n shares, any t of them being enough to sign.

    Return the shares, shares[i-1] belonging to participant i,
    and the public shares f(i)*G indexed by participant.
    """

    if not 1 <= t <= n:
        raise FROSTlibValueError(f"invalid threshold: {t} of {n}")
    if n >= ec.n:
        raise FROSTlibValueError(f"too many participants: {n}")
    if not 0 < secret < ec.n:
        raise FROSTlibValueError(f"secret not in 1..n-1: {int_repr(secret)}")

    group_public_key = mult(secret, ec.G, ec)

    coefficients = [secret] + [random_scalar(rng, ec) for _ in range(t - 1)]
    shares: List[KeyShare] = []
    public_shares: Dict[int, Point] = {}
    for i in range(1, n + 1):
        share = KeyShare(
            i, _polynomial_value(coefficients, i, ec.n), group_public_key, pr_sig, ec
        )
        shares.append(share)
        public_shares[i] = share.public_share
    return shares, public_shares
