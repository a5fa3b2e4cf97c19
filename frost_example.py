#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

import logging

from frostlib.address import encode_address
from frostlib.ciphersuite import FROST_SECP256K1 as suite
from frostlib.keys import gen_keys
from frostlib.recovery import reconstruct_secret
from frostlib.schnorr import sign, verify
from frostlib.session import Signer, SigningSession
from frostlib.sharing import generate_shares

logging.basicConfig(level=logging.INFO, format="%(name)s %(levelname)s: %(message)s")

print("\n*** Ciphersuite:")
print(suite.name)

msg = "2-of-3 signers approve this message".encode()
print("\n0. Message to be signed")
print(f"        {msg.hex().upper()}")

print("\n*** Vanilla Schnorr")
print("1. Key generation")
prv_key, compute_key = gen_keys(suite=suite)
address = compute_key.address(suite)
print(f" pk_sig: {hex(compute_key.pk_sig[0]).upper()}")
print(f" pr_sig: {hex(compute_key.pr_sig[0]).upper()}")
print(f"address: {encode_address(address, suite)}")

print("2. Sign message")
sig = sign(msg, prv_key, suite=suite)
print(f"    c: {hex(sig.challenge).upper()}")
print(f"    s: {hex(sig.response).upper()}")

print("3. Verify signature")
print(verify(msg, address, sig, suite))

print("\n*** 2-of-3 threshold FROST")
n, t = 3, 2
print("1. Trusted dealer key shares")
shares, public_shares = generate_shares(n, t, prv_key.sk_sig, compute_key.pr_sig)
for i, public_share in public_shares.items():
    print(f"    participant {i}: {hex(public_share[0]).upper()}")

print("2. Audited reconstruction check")
secret = reconstruct_secret(shares[:t], reason="demonstration sanity check")
print(secret == prv_key.sk_sig)

print("3. Round one: commitments")
signers = [Signer(share, suite) for share in shares[1:]]
session = SigningSession(compute_key, t, suite)
for signer in signers:
    session.add_commitment(signer.commit())
signing_set = session.bind(msg)
print(f"    signing set: {[commitment.index for commitment in signing_set]}")

print("4. Round two: partial signatures")
for signer in signers:
    partial_signature = signer.sign(signing_set, msg)
    print(f"    z_{partial_signature.index}: {hex(partial_signature.z).upper()}")
    session.add_partial_signature(partial_signature)

print("5. Aggregate signature")
threshold_sig = session.aggregate()
print(f"    c: {hex(threshold_sig.challenge).upper()}")
print(f"    z: {hex(threshold_sig.response).upper()}")

print("6. Verify aggregate signature (vanilla verification)")
print(verify(msg, address, threshold_sig, suite))
print(session.verify())
