#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""FROST preprocessing: single-use nonce pairs and their commitments.

Each participant samples nonce pairs (d, e) and publishes
the commitments (D, E) = (d*G, e*G) tagged with its index.
A nonce pair must be used for one partial signature only:
signing two different messages (or with two different signing sets)
with the same nonce pair reveals the participant secret share.

SigningNonce enforces this: it can be consumed only once
and it cannot be copied or pickled.
"""

import logging
from dataclasses import InitVar, dataclass, field
from typing import Any, Iterable, List, NoReturn, Optional, Tuple

from dataclasses_json import DataClassJsonMixin, config

from frostlib.alias import Point, RandomBytes
from frostlib.ciphersuite import FROST_SECP256K1, Ciphersuite
from frostlib.curve import CURVES, Curve, mult, secp256k1
from frostlib.exceptions import (
    FROSTlibTypeError,
    FROSTlibValueError,
    MissingDataError,
    NonceReuseError,
)
from frostlib.primitives import random_scalar
from frostlib.utils import hex_strings_from_point, point_from_hex_strings

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SigningCommitment(DataClassJsonMixin):
    index: int
    # hiding commitment D = d*G
    hiding: Point = field(
        metadata=config(encoder=hex_strings_from_point, decoder=point_from_hex_strings)
    )
    # binding commitment E = e*G
    binding: Point = field(
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
        if not 0 < self.index < self.ec.n:
            raise FROSTlibValueError(f"invalid participant index: {self.index}")
        for name in ("hiding", "binding"):
            Q = getattr(self, name)
            if not self.ec.is_on_curve(Q):
                raise FROSTlibValueError(f"{name} commitment not on curve")
            if Q[1] == 0:
                raise FROSTlibValueError(f"{name} commitment is the infinity point")


class SigningNonce:
    "Single-use secret (hiding, binding) nonce pair."

    __slots__ = ("_hiding", "_binding", "_ec")

    def __init__(self, hiding: int, binding: int, ec: Curve = secp256k1) -> None:
        for name, q in (("hiding", hiding), ("binding", binding)):
            if not 0 < q < ec.n:
                raise FROSTlibValueError(f"{name} nonce not in 1..n-1")
        self._hiding: Optional[int] = hiding
        self._binding: Optional[int] = binding
        self._ec = ec

    @property
    def ec(self) -> Curve:
        return self._ec

    @property
    def consumed(self) -> bool:
        return self._hiding is None

    def _secrets(self) -> Tuple[int, int]:
        if self._hiding is None or self._binding is None:
            raise NonceReuseError("signing nonce already consumed")
        return self._hiding, self._binding

    def commitment(
        self, index: int, suite: Ciphersuite = FROST_SECP256K1
    ) -> SigningCommitment:
        "Return the public commitment of this nonce pair."
        ec = suite.curve
        if ec is not self._ec:
            raise FROSTlibValueError(f"curve mismatch: {ec.name}")
        hiding, binding = self._secrets()
        D = mult(hiding, ec.G, ec)
        E = mult(binding, ec.G, ec)
        return SigningCommitment(index, D, E, ec)

    def consume(self) -> Tuple[int, int]:
        """Return the (hiding, binding) pair and forget it.

        Any later call raises NonceReuseError.
        """
        hiding_binding = self._secrets()
        self._hiding = None
        self._binding = None
        return hiding_binding

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(consumed={self.consumed})"

    def __copy__(self) -> NoReturn:
        raise FROSTlibTypeError("signing nonces cannot be copied")

    def __deepcopy__(self, memo: Any) -> NoReturn:
        raise FROSTlibTypeError("signing nonces cannot be copied")

    def __reduce_ex__(self, protocol: Any) -> NoReturn:
        raise FROSTlibTypeError("signing nonces cannot be pickled")


def preprocess(
    count: int,
    participant_index: int,
    rng: Optional[RandomBytes] = None,
    suite: Ciphersuite = FROST_SECP256K1,
    logger: Optional[logging.Logger] = None,
) -> Tuple[List[SigningNonce], List[SigningCommitment]]:
    """Return count nonce pairs and their positionally paired commitments.

    Nonces are sampled independently and uniformly from rng,
    secrets.token_bytes being the default randomness source;
    a failing source raises RandomnessExhaustedError.
    """

    logger = logger or _logger
    ec = suite.curve
    if count < 1:
        raise FROSTlibValueError(f"invalid nonce count: {count}")
    if not 0 < participant_index < ec.n:
        raise FROSTlibValueError(f"invalid participant index: {participant_index}")

    nonces: List[SigningNonce] = []
    commitments: List[SigningCommitment] = []
    for _ in range(count):
        nonce = SigningNonce(random_scalar(rng, ec), random_scalar(rng, ec), ec)
        nonces.append(nonce)
        commitments.append(nonce.commitment(participant_index, suite))

    logger.debug("participant %d: %d nonce pairs", participant_index, count)
    return nonces, commitments


# the commitments of a signing session, sorted by participant index
SigningSet = Tuple[SigningCommitment, ...]


def signing_set(commitments: Iterable[SigningCommitment]) -> SigningSet:
    "Return the immutable signing set, sorted by ascending participant index."

    result = tuple(sorted(commitments, key=lambda commitment: commitment.index))
    if not result:
        raise MissingDataError("empty signing set")

    indices = [commitment.index for commitment in result]
    if len(set(indices)) != len(indices):
        raise FROSTlibValueError(f"duplicate participant indices: {indices}")

    ec = result[0].ec
    if any(commitment.ec is not ec for commitment in result):
        raise FROSTlibValueError("not the same curve for all commitments")
    return result
