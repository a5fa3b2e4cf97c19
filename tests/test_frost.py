#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `frostlib.frost` module."

import random
from itertools import combinations
from typing import List, Optional, Sequence, Tuple

import pytest

from frostlib.address import encode_address
from frostlib.ciphersuite import CIPHERSUITES, FROST_SECP256K1, Ciphersuite
from frostlib.curve import mult, secp256k1
from frostlib.exceptions import (
    FROSTlibValueError,
    MissingDataError,
    NonceReuseError,
)
from frostlib.frost import (
    PartialSignature,
    aggregate,
    binding_factor,
    binding_factors,
    group_commitment,
    partial_sign,
)
from frostlib.keys import ComputeKey, PrivateKey
from frostlib.lagrange import lagrange_coefficient
from frostlib.number_theory import mod_inv
from frostlib.preprocess import SigningNonce, preprocess, signing_set
from frostlib.primitives import random_scalar
from frostlib.schnorr import Sig, challenge_, sign, verify
from frostlib.sharing import KeyShare, generate_shares

P256 = CIPHERSUITES["FROST-P256-SHA256"]
TESTNET = CIPHERSUITES["FROST-secp256k1-SHA256-testnet"]


def _deal(
    n: int, t: int, seed: int, suite: Ciphersuite = FROST_SECP256K1
) -> Tuple[PrivateKey, List[KeyShare], ComputeKey]:
    rng = random.Random(seed).randbytes
    ec = suite.curve
    prv_key = PrivateKey(random_scalar(rng, ec), random_scalar(rng, ec), ec)
    pr_sig = prv_key.compute_key.pr_sig
    shares, _ = generate_shares(n, t, prv_key.sk_sig, pr_sig, rng, ec)
    return prv_key, shares, shares[0].compute_key


def _threshold_sign(
    shares: Sequence[KeyShare],
    msg: bytes,
    compute_key: ComputeKey,
    suite: Ciphersuite = FROST_SECP256K1,
    rng: Optional[random.Random] = None,
) -> Sig:
    randbytes = rng.randbytes if rng else None
    nonces = {}
    commitments = []
    for share in shares:
        nonces_i, commitments_i = preprocess(1, share.index, randbytes, suite)
        nonces[share.index] = nonces_i[0]
        commitments.append(commitments_i[0])
    B = signing_set(commitments)
    partial_signatures = [
        partial_sign(share, nonces[share.index], B, msg, suite) for share in shares
    ]
    return aggregate(partial_signatures, B, msg, compute_key, suite)


def test_completeness() -> None:
    rng = random.Random(1)
    _, shares, compute_key = _deal(4, 3, 1)
    A = compute_key.address()
    msg = b"completeness"
    for size in (3, 4):
        for subset in combinations(shares, size):
            sig = _threshold_sign(subset, msg, compute_key, rng=rng)
            assert sig.compute_key == compute_key
            assert verify(msg, A, sig)
            assert verify(msg, encode_address(A), sig.serialize())


def test_two_of_three() -> None:
    _, shares, compute_key = _deal(3, 2, 2)
    addr = encode_address(compute_key.address())
    msg = b"transfer 10 coins to Bob"

    signatures = [
        _threshold_sign([shares[i], shares[j]], msg, compute_key)
        for i, j in ((0, 1), (0, 2), (1, 2))
    ]
    for sig in signatures:
        assert verify(msg, addr, sig)
        assert not verify(b"transfer 10 coins to Eve", addr, sig)
    # fresh nonces, different signatures
    assert len({sig.challenge for sig in signatures}) == 3


def test_vanilla_equivalence() -> None:
    for suite in (FROST_SECP256K1, P256):
        prv_key, shares, compute_key = _deal(3, 2, 3, suite)
        # the group compute key is the one of the dealt private key
        assert compute_key == prv_key.compute_key
        A = compute_key.address(suite)
        msg = b"same verifier"
        threshold_sig = _threshold_sign(shares[1:], msg, compute_key, suite)
        vanilla_sig = sign(msg, prv_key, suite=suite)
        assert verify(msg, A, threshold_sig, suite)
        assert verify(msg, A, vanilla_sig, suite)
        assert type(threshold_sig) is type(vanilla_sig)
        assert len(threshold_sig.serialize()) == len(vanilla_sig.serialize())

    # a single participant holding the whole secret
    prv_key, shares, compute_key = _deal(1, 1, 4)
    sig = _threshold_sign(shares, b"1-of-1", compute_key)
    assert verify(b"1-of-1", compute_key.address(), sig)


def test_not_enough_signers() -> None:
    _, shares, compute_key = _deal(5, 3, 5)
    A = compute_key.address()
    msg = b"not enough"
    for subset in combinations(shares, 2):
        sig = _threshold_sign(subset, msg, compute_key)
        assert not verify(msg, A, sig)


def test_inconsistent_sessions() -> None:
    _, shares, compute_key = _deal(3, 3, 6)
    A = compute_key.address()
    msg = b"consistent message"

    nonces = {}
    commitments = []
    for share in shares:
        nonces_i, commitments_i = preprocess(1, share.index)
        nonces[share.index] = nonces_i[0]
        commitments.append(commitments_i[0])
    B = signing_set(commitments)

    # participant 3 sees a different commitment from participant 2
    _, other_commitments = preprocess(1, 2)
    B3 = signing_set([commitments[0], other_commitments[0], commitments[2]])
    partial_signatures = [
        partial_sign(shares[0], nonces[1], B, msg),
        partial_sign(shares[1], nonces[2], B, msg),
        partial_sign(shares[2], nonces[3], B3, msg),
    ]
    sig = aggregate(partial_signatures, B, msg, compute_key)
    assert not verify(msg, A, sig)

    # participant 3 signs a different message
    nonces = {}
    commitments = []
    for share in shares:
        nonces_i, commitments_i = preprocess(1, share.index)
        nonces[share.index] = nonces_i[0]
        commitments.append(commitments_i[0])
    B = signing_set(commitments)
    partial_signatures = [
        partial_sign(shares[0], nonces[1], B, msg),
        partial_sign(shares[1], nonces[2], B, msg),
        partial_sign(shares[2], nonces[3], B, b"another message"),
    ]
    sig = aggregate(partial_signatures, B, msg, compute_key)
    assert not verify(msg, A, sig)
    sig = aggregate(partial_signatures, B, b"another message", compute_key)
    assert not verify(b"another message", A, sig)


def test_binding_factors() -> None:
    commitments = [preprocess(1, i)[1][0] for i in (1, 2, 3)]
    msg = b"binding"
    rho = binding_factors(commitments, msg)
    assert sorted(rho) == [1, 2, 3]
    assert len(set(rho.values())) == 3
    for i, rho_i in rho.items():
        assert 0 < rho_i < secp256k1.n
        assert binding_factor(i, commitments, msg) == rho_i

    # deterministic and independent of the commitment order
    assert binding_factors(list(reversed(commitments)), msg) == rho
    assert binding_factors(signing_set(commitments), msg.hex()) == rho

    # any change diverges
    assert binding_factors(commitments, b"binding!") != rho
    other = [commitments[0], commitments[1], preprocess(1, 3)[1][0]]
    assert binding_factors(other, msg)[1] != rho[1]
    assert binding_factors(commitments[:2], msg)[1] != rho[1]
    assert binding_factors(commitments, msg, TESTNET) != rho


def test_group_commitment() -> None:
    nonces, commitments = [], []
    for i in (1, 2):
        nonces_i, commitments_i = preprocess(1, i)
        nonces += nonces_i
        commitments += commitments_i
    msg = b"group commitment"
    rho = binding_factors(commitments, msg)
    R = group_commitment(commitments, rho)

    expected = 0
    for nonce, commitment in zip(nonces, commitments):
        d, e = nonce.consume()
        expected += d + e * rho[commitment.index]
    assert R == mult(expected)

    with pytest.raises(MissingDataError, match="missing binding factor"):
        group_commitment(commitments, {1: rho[1]})


def test_nonce_reuse_leaks_secret_share() -> None:
    _, shares, compute_key = _deal(3, 2, 7)
    share = shares[0]

    # the library refuses to sign twice with the same nonce
    nonces, commitments = preprocess(1, 1)
    _, commitments_2 = preprocess(1, 2)
    B = signing_set(commitments + commitments_2)
    partial_sign(share, nonces[0], B, b"first")
    with pytest.raises(NonceReuseError, match="already consumed"):
        partial_sign(share, nonces[0], B, b"second")

    # what a nonce reuse would give away: bypassing the guard with
    # copies of the same secrets, three partial signatures reveal the share
    d, e = 3141592653589793, 2718281828459045
    commitment_1 = SigningNonce(d, e).commitment(1)
    B = signing_set([commitment_1, commitments_2[0]])
    lam = lagrange_coefficient(1, [1, 2])
    n = secp256k1.n
    A = compute_key.address()
    zs, rhos, cs = [], [], []
    for msg in (b"m1", b"m2", b"m3"):
        zs.append(partial_sign(share, SigningNonce(d, e), B, msg).z)
        rho = binding_factors(B, msg)
        R = group_commitment(B, rho)
        rhos.append(rho[1])
        cs.append(challenge_(R, compute_key, A, msg))

    dz2, dz3 = zs[1] - zs[0], zs[2] - zs[0]
    drho2, drho3 = rhos[1] - rhos[0], rhos[2] - rhos[0]
    dc2, dc3 = cs[1] - cs[0], cs[2] - cs[0]
    num = dz2 * drho3 - dz3 * drho2
    den = -lam * (dc2 * drho3 - dc3 * drho2)
    recovered = num * mod_inv(den, n) % n
    assert recovered == share.secret_share


def test_partial_sign_errors() -> None:
    _, shares, _ = _deal(3, 2, 8)
    nonces, commitments = preprocess(1, 1)
    _, commitments_2 = preprocess(1, 2)
    B = signing_set(commitments + commitments_2)

    # participant 3 is not in the signing set
    nonce = preprocess(1, 3)[0][0]
    with pytest.raises(MissingDataError, match="no commitment for participant 3"):
        partial_sign(shares[2], nonce, B, b"msg")
    # the nonce is consumed anyway
    assert nonce.consumed

    # nonce not matching the participant commitment
    with pytest.raises(FROSTlibValueError, match="nonce does not match"):
        partial_sign(shares[0], SigningNonce(1, 2), B, b"msg")

    # curve mismatch
    with pytest.raises(FROSTlibValueError, match="curve mismatch: "):
        partial_sign(shares[0], nonces[0], B, b"msg", P256)
    assert nonces[0].consumed


def test_aggregate_errors() -> None:
    _, shares, compute_key = _deal(3, 2, 9)
    msg = b"aggregate"
    nonces, commitments = [], []
    for share in shares[:2]:
        nonces_i, commitments_i = preprocess(1, share.index)
        nonces += nonces_i
        commitments += commitments_i
    B = signing_set(commitments)
    z1 = partial_sign(shares[0], nonces[0], B, msg)
    z2 = partial_sign(shares[1], nonces[1], B, msg)

    with pytest.raises(MissingDataError, match=r"missing partial signatures: \[2\]"):
        aggregate([z1], B, msg, compute_key)
    with pytest.raises(FROSTlibValueError, match="duplicate partial signature: 1"):
        aggregate([z1, z1, z2], B, msg, compute_key)
    z3 = PartialSignature(3, 1)
    with pytest.raises(FROSTlibValueError, match="from non-participant: 3"):
        aggregate([z1, z2, z3], B, msg, compute_key)
    with pytest.raises(MissingDataError, match="empty signing set"):
        aggregate([z1, z2], [], msg, compute_key)

    sig = aggregate([z2, z1], B, msg, compute_key)
    assert verify(msg, compute_key.address(), sig)
    # a wrong partial signature is detected only by the final verification
    wrong = PartialSignature(2, (z2.z + 1) % secp256k1.n)
    sig = aggregate([z1, wrong], B, msg, compute_key)
    assert not verify(msg, compute_key.address(), sig)


def test_cross_suite() -> None:
    _, shares, compute_key = _deal(3, 2, 10)
    A = compute_key.address()
    msg = b"cross suite"
    sig = _threshold_sign(shares[:2], msg, compute_key)
    assert verify(msg, A, sig)
    assert not verify(msg, A, sig, TESTNET)
    assert not verify(msg, A, sig, P256)

    # every participant and the verifier must agree on the suite
    sig = _threshold_sign(shares[:2], msg, compute_key, TESTNET)
    assert verify(msg, compute_key.address(TESTNET), sig, TESTNET)
    assert not verify(msg, A, sig)


def test_json() -> None:
    _, shares, compute_key = _deal(3, 2, 11)
    msg = b"json"
    nonces, commitments = [], []
    for share in shares[:2]:
        nonces_i, commitments_i = preprocess(1, share.index)
        nonces += nonces_i
        commitments += commitments_i

    # commitments and partial signatures travel as JSON
    received = [type(c).from_json(c.to_json()) for c in commitments]
    assert received == commitments
    B = signing_set(received)
    partial_signatures = [
        partial_sign(share, nonce, B, msg) for share, nonce in zip(shares, nonces)
    ]
    received_z = [PartialSignature.from_json(z.to_json()) for z in partial_signatures]
    assert received_z == partial_signatures
    assert PartialSignature.from_dict(partial_signatures[0].to_dict()).z == (
        partial_signatures[0].z
    )

    sig = aggregate(received_z, B, msg, compute_key)
    assert verify(msg, compute_key.address(), Sig.from_json(sig.to_json()))

    with pytest.raises(FROSTlibValueError, match="z not in 0..n-1: "):
        PartialSignature(1, secp256k1.n)
    with pytest.raises(FROSTlibValueError, match="invalid participant index: "):
        PartialSignature(0, 1)
