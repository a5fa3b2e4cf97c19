#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Signing session bookkeeping.

Signer is the participant side: it owns its pending nonces,
publishes their commitments, and signs at most once with each of them.

SigningSession is the coordinator side state machine:

    IDLE -> PREPROCESSED -> BOUND -> PARTIALLY_SIGNED -> AGGREGATED -> VERIFIED

Any failure moves the session to FAILED, a terminal state:
there are no retries, a new session with fresh nonces is required.
"""

import contextlib
import logging
from enum import Enum
from typing import Dict, Iterator, Optional

from frostlib.address import Address
from frostlib.alias import Octets, RandomBytes
from frostlib.ciphersuite import FROST_SECP256K1, Ciphersuite
from frostlib.exceptions import (
    FROSTlibValueError,
    MissingDataError,
    NonceReuseError,
    SessionStateError,
)
from frostlib.frost import PartialSignature, aggregate, binding_factors, partial_sign
from frostlib.keys import ComputeKey
from frostlib.preprocess import SigningCommitment, SigningNonce, SigningSet
from frostlib.preprocess import preprocess, signing_set
from frostlib.schnorr import Sig, verify
from frostlib.sharing import KeyShare
from frostlib.utils import bytes_from_octets

_logger = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    PREPROCESSED = "preprocessed"
    BOUND = "bound"
    PARTIALLY_SIGNED = "partially signed"
    AGGREGATED = "aggregated"
    VERIFIED = "verified"
    FAILED = "failed"


class Signer:
    "Participant holding a key share and its pending nonces."

    def __init__(
        self,
        share: KeyShare,
        suite: Ciphersuite = FROST_SECP256K1,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if share.ec is not suite.curve:
            raise FROSTlibValueError(f"curve mismatch: {share.ec.name}")
        self.share = share
        self.suite = suite
        self.logger = logger or _logger
        self._nonces: Dict[SigningCommitment, SigningNonce] = {}

    @property
    def index(self) -> int:
        return self.share.index

    @property
    def pending(self) -> int:
        "Return the number of commitments still waiting to be signed with."
        return len(self._nonces)

    def commit(self, rng: Optional[RandomBytes] = None) -> SigningCommitment:
        "Return a fresh commitment, keeping its nonce for a later signature."
        nonces, commitments = preprocess(
            1, self.share.index, rng, self.suite, self.logger
        )
        self._nonces[commitments[0]] = nonces[0]
        return commitments[0]

    def sign(self, commitments: SigningSet, msg: Octets) -> PartialSignature:
        """Return the partial signature for the session.

        The nonce of this signer commitment in the signing set
        is removed before signing: it is never used twice.
        """
        own = [c for c in commitments if c.index == self.share.index]
        if not own:
            err_msg = f"no commitment for participant {self.share.index}"
            raise MissingDataError(err_msg)
        nonce = self._nonces.pop(own[0], None)
        if nonce is None:
            err_msg = f"no pending nonce for participant {self.share.index} commitment"
            raise NonceReuseError(err_msg)
        return partial_sign(
            self.share, nonce, commitments, msg, self.suite, self.logger
        )


class SigningSession:
    "Coordinator of a single threshold signing session."

    def __init__(
        self,
        compute_key: ComputeKey,
        threshold: int,
        suite: Ciphersuite = FROST_SECP256K1,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if threshold < 1:
            raise FROSTlibValueError(f"invalid threshold: {threshold}")
        if compute_key.ec is not suite.curve:
            raise FROSTlibValueError(f"curve mismatch: {compute_key.ec.name}")
        self.compute_key = compute_key
        self.threshold = threshold
        self.suite = suite
        self.logger = logger or _logger

        self.state = SessionState.IDLE
        self._commitments: Dict[int, SigningCommitment] = {}
        self._partial_signatures: Dict[int, PartialSignature] = {}
        self.signing_set: SigningSet = ()
        self.binding_factors: Dict[int, int] = {}
        self.msg = b""
        self.signature: Optional[Sig] = None

    def _require(self, *states: SessionState) -> None:
        if self.state not in states:
            raise SessionStateError(f"invalid session state: {self.state.value}")

    def _set_state(self, state: SessionState) -> None:
        self.logger.debug("session: %s -> %s", self.state.value, state.value)
        self.state = state

    @contextlib.contextmanager
    def _step(self, *states: SessionState) -> Iterator[None]:
        if self.state is SessionState.FAILED:
            raise SessionStateError("failed session")
        try:
            self._require(*states)
            yield
        except Exception:
            self._set_state(SessionState.FAILED)
            raise

    def add_commitment(self, commitment: SigningCommitment) -> None:
        with self._step(SessionState.IDLE, SessionState.PREPROCESSED):
            commitment.assert_valid()
            if commitment.ec is not self.suite.curve:
                raise FROSTlibValueError(f"curve mismatch: {commitment.ec.name}")
            if commitment.index in self._commitments:
                err_msg = f"duplicate commitment for participant {commitment.index}"
                raise FROSTlibValueError(err_msg)
            if len(self._commitments) == self.threshold:
                raise FROSTlibValueError(f"more than {self.threshold} commitments")
            self._commitments[commitment.index] = commitment
            self._set_state(SessionState.PREPROCESSED)

    def bind(self, msg: Octets) -> SigningSet:
        "Fix the signing set and the message, computing the binding factors."
        with self._step(SessionState.PREPROCESSED):
            if len(self._commitments) < self.threshold:
                err_msg = f"{len(self._commitments)} commitments "
                err_msg += f"instead of {self.threshold}"
                raise MissingDataError(err_msg)
            self.signing_set = signing_set(self._commitments.values())
            self.msg = bytes_from_octets(msg)
            self.binding_factors = binding_factors(
                self.signing_set, self.msg, self.suite
            )
            self._set_state(SessionState.BOUND)
            return self.signing_set

    def add_partial_signature(self, partial_signature: PartialSignature) -> None:
        with self._step(SessionState.BOUND, SessionState.PARTIALLY_SIGNED):
            i = partial_signature.index
            if i not in self._commitments:
                err_msg = f"partial signature from non-participant: {i}"
                raise FROSTlibValueError(err_msg)
            if i in self._partial_signatures:
                raise FROSTlibValueError(f"duplicate partial signature: {i}")
            self._partial_signatures[i] = partial_signature
            self._set_state(SessionState.PARTIALLY_SIGNED)

    def aggregate(self) -> Sig:
        with self._step(SessionState.PARTIALLY_SIGNED):
            self.signature = aggregate(
                self._partial_signatures.values(),
                self.signing_set,
                self.msg,
                self.compute_key,
                self.suite,
                self.logger,
            )
            self._set_state(SessionState.AGGREGATED)
            return self.signature

    def verify(self, address: Optional[Address] = None) -> bool:
        """Verify the aggregated signature.

        The address defaults to the one of the session compute key.
        A signature that does not verify fails the session.
        """
        with self._step(SessionState.AGGREGATED):
            if self.signature is None:
                raise MissingDataError("no aggregated signature")
            if address is None:
                address = self.compute_key.address(self.suite)
            if verify(self.msg, address, self.signature, self.suite):
                self._set_state(SessionState.VERIFIED)
                return True
            self._set_state(SessionState.FAILED)
            return False
