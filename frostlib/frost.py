#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""FROST: Flexible Round-Optimized Schnorr Threshold signatures.

https://eprint.iacr.org/2020/852

Any t of the n holders of a Shamir share of the signature private key
produce a signature that verifies with frostlib.schnorr.verify.

After preprocessing (frostlib.preprocess), a signing session
over the signing set B of t commitments goes as follows.

Each participant i in B computes the binding factors

    rho_j = H1(j, H(m), [k, x(D_k), x(E_k)] for k in B)

for every j in B, the commitments being sorted by ascending index,
and the group commitment

    R = sum_{j in B} (D_j + rho_j*E_j)

then the challenge c (see frostlib.schnorr) and its partial signature

    z_i = d_i + e_i*rho_i - lambda_i*s_i*c

where (d_i, e_i) is its nonce pair, s_i its secret share,
and lambda_i its Lagrange coefficient over the indices in B.

The aggregator recomputes R and c and sums the partial signatures
into the signature (c, z = sum z_i, compute key).
Partial signatures are not individually verified:
a wrong one is detected only by the final signature verification.
"""

import logging
from dataclasses import InitVar, dataclass, field
from typing import Dict, Iterable, List, Optional

from dataclasses_json import DataClassJsonMixin, config

from frostlib.alias import Octets, Point
from frostlib.ciphersuite import FROST_SECP256K1, Ciphersuite
from frostlib.curve import CURVES, Curve, mult, multi_mult, secp256k1
from frostlib.exceptions import FROSTlibValueError, MissingDataError
from frostlib.keys import ComputeKey
from frostlib.lagrange import lagrange_coefficient
from frostlib.preprocess import SigningCommitment, SigningNonce
from frostlib.preprocess import signing_set as _signing_set
from frostlib.primitives import field_from_int, h1, h_msg, x_coordinate
from frostlib.schnorr import Sig, challenge_
from frostlib.sharing import KeyShare
from frostlib.utils import hex_string, int_from_integer, int_repr

_logger = logging.getLogger(__name__)


def _commitments_fields(
    commitments: Iterable[SigningCommitment], suite: Ciphersuite
) -> List[int]:
    # sorting is mandatory, whatever the input order:
    # all participants must hash the same preimage
    ec = suite.curve
    fields: List[int] = []
    for commitment in sorted(commitments, key=lambda c: c.index):
        fields.append(field_from_int(commitment.index, ec))
        fields.append(x_coordinate(commitment.hiding, ec))
        fields.append(x_coordinate(commitment.binding, ec))
    return fields


def binding_factor(
    participant_index: int,
    signing_set: Iterable[SigningCommitment],
    msg: Octets,
    suite: Ciphersuite = FROST_SECP256K1,
) -> int:
    "Return the binding factor of participant_index in the signing session."

    fields = [field_from_int(participant_index, suite.curve), h_msg(msg, suite)]
    fields += _commitments_fields(signing_set, suite)
    return h1(fields, suite)


def binding_factors(
    signing_set: Iterable[SigningCommitment],
    msg: Octets,
    suite: Ciphersuite = FROST_SECP256K1,
) -> Dict[int, int]:
    "Return the binding factors of all participants in the signing session."

    commitments = list(signing_set)
    commitments_fields = _commitments_fields(commitments, suite)
    msg_hash = h_msg(msg, suite)
    ec = suite.curve
    return {
        commitment.index: h1(
            [field_from_int(commitment.index, ec), msg_hash] + commitments_fields,
            suite,
        )
        for commitment in commitments
    }


def group_commitment(
    signing_set: Iterable[SigningCommitment],
    binding_factors_: Dict[int, int],
    suite: Ciphersuite = FROST_SECP256K1,
) -> Point:
    """Return the group commitment R = sum (D_i + rho_i*E_i).

    Commitments are not checked to be different from the infinity point.
    """

    scalars: List[int] = []
    points: List[Point] = []
    for commitment in signing_set:
        if commitment.index not in binding_factors_:
            err_msg = f"missing binding factor for participant {commitment.index}"
            raise MissingDataError(err_msg)
        scalars += [1, binding_factors_[commitment.index]]
        points += [commitment.hiding, commitment.binding]
    return multi_mult(scalars, points, suite.curve)


@dataclass(frozen=True)
class PartialSignature(DataClassJsonMixin):
    index: int
    z: int = field(metadata=config(encoder=hex_string, decoder=int_from_integer))
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
        if not 0 <= self.z < self.ec.n:
            raise FROSTlibValueError(f"z not in 0..n-1: {int_repr(self.z)}")


def _session_challenge(
    signing_set: Iterable[SigningCommitment],
    rho: Dict[int, int],
    msg: Octets,
    compute_key: ComputeKey,
    suite: Ciphersuite,
    logger: logging.Logger,
) -> int:
    R = group_commitment(signing_set, rho, suite)
    address = compute_key.address(suite)
    c = challenge_(R, compute_key, address, msg, suite)
    logger.debug("group commitment: %s", R)
    logger.debug("challenge: %s", hex_string(c))
    return c


def partial_sign(
    share: KeyShare,
    nonce: SigningNonce,
    signing_set: Iterable[SigningCommitment],
    msg: Octets,
    suite: Ciphersuite = FROST_SECP256K1,
    logger: Optional[logging.Logger] = None,
) -> PartialSignature:
    """Return the partial signature of the share holder.

    The nonce is consumed, whatever the outcome:
    a failed attempt requires a new preprocessing round.
    """

    logger = logger or _logger
    hiding, binding = nonce.consume()

    ec = suite.curve
    if share.ec is not ec:
        raise FROSTlibValueError(f"curve mismatch: {share.ec.name}")

    B = _signing_set(signing_set)
    own = [commitment for commitment in B if commitment.index == share.index]
    if not own:
        err_msg = f"no commitment for participant {share.index} in signing set"
        raise MissingDataError(err_msg)
    D = mult(hiding, ec.G, ec)
    E = mult(binding, ec.G, ec)
    if (D, E) != (own[0].hiding, own[0].binding):
        raise FROSTlibValueError(f"nonce does not match commitment {share.index}")

    rho = binding_factors(B, msg, suite)
    c = _session_challenge(B, rho, msg, share.compute_key, suite, logger)
    lam = lagrange_coefficient(share.index, [commitment.index for commitment in B], ec)

    z = (hiding + binding * rho[share.index] - lam * share.secret_share * c) % ec.n
    logger.debug("participant %d: partial signature", share.index)
    return PartialSignature(share.index, z, ec)


def aggregate(
    partial_signatures: Iterable[PartialSignature],
    signing_set: Iterable[SigningCommitment],
    msg: Octets,
    compute_key: ComputeKey,
    suite: Ciphersuite = FROST_SECP256K1,
    logger: Optional[logging.Logger] = None,
) -> Sig:
    """Return the signature aggregating the partial signatures.

    There must be exactly one partial signature
    for each participant in the signing set.
    """

    logger = logger or _logger
    ec = suite.curve
    B = _signing_set(signing_set)
    indices = [commitment.index for commitment in B]

    z_by_index: Dict[int, int] = {}
    for partial_signature in partial_signatures:
        i = partial_signature.index
        if i in z_by_index:
            raise FROSTlibValueError(f"duplicate partial signature: {i}")
        if i not in indices:
            raise FROSTlibValueError(f"partial signature from non-participant: {i}")
        z_by_index[i] = partial_signature.z

    missing = [i for i in indices if i not in z_by_index]
    if missing:
        raise MissingDataError(f"missing partial signatures: {missing}")

    rho = binding_factors(B, msg, suite)
    c = _session_challenge(B, rho, msg, compute_key, suite, logger)
    z = sum(z_by_index.values()) % ec.n
    logger.debug("aggregated %d partial signatures", len(indices))
    return Sig(c, z, compute_key)
