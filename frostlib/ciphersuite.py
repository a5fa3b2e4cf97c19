#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Ciphersuite constants and associated functions.

A ciphersuite fixes everything the participants and the verifier
must agree upon byte for byte:
the curve, the hash function, one domain tag for each of the
hash functions (message, binding, challenge, address),
the arities of the binding and challenge hashes,
and the bech32 human readable part of the derived addresses.
"""

import json
from dataclasses import dataclass
from os import path
from typing import Any, Dict, Mapping, Type, TypeVar, Union

from frostlib.alias import HashF, String
from frostlib.curve import CURVES, Curve
from frostlib.exceptions import FROSTlibValueError
from frostlib.hashes import HASH_FUNCTIONS

_TAGS = ("message_tag", "binding_tag", "challenge_tag", "address_tag")

_Ciphersuite = TypeVar("_Ciphersuite", bound="Ciphersuite")


@dataclass(frozen=True)
class Ciphersuite:
    name: str

    curve: Curve
    hash_name: str

    # domain separation tags
    message_tag: bytes
    binding_tag: bytes
    challenge_tag: bytes
    address_tag: bytes

    # hash-to-scalar arities
    binding_rate: int
    challenge_rate: int

    # bech32 address starts with hrp + '1'
    hrp: str

    def __init__(
        self,
        name: str,
        curve: Curve,
        hash_name: str,
        message_tag: String,
        binding_tag: String,
        challenge_tag: String,
        address_tag: String,
        binding_rate: int,
        challenge_rate: int,
        hrp: str,
        check_validity: bool = True,
    ) -> None:

        object.__setattr__(self, "name", name)
        object.__setattr__(self, "curve", curve)
        object.__setattr__(self, "hash_name", hash_name.strip().lower())

        object.__setattr__(self, "message_tag", _tag_bytes(message_tag))
        object.__setattr__(self, "binding_tag", _tag_bytes(binding_tag))
        object.__setattr__(self, "challenge_tag", _tag_bytes(challenge_tag))
        object.__setattr__(self, "address_tag", _tag_bytes(address_tag))

        object.__setattr__(self, "binding_rate", binding_rate)
        object.__setattr__(self, "challenge_rate", challenge_rate)

        object.__setattr__(self, "hrp", hrp.strip().lower())

        if check_validity:
            self.assert_valid()

    @property
    def hf(self) -> HashF:
        return HASH_FUNCTIONS[self.hash_name]

    def to_dict(self, check_validity: bool = True) -> Dict[str, Union[str, int]]:

        if check_validity:
            self.assert_valid()

        return {
            "name": self.name,
            "curve": self.curve.name,
            "hash_name": self.hash_name,
            "message_tag": self.message_tag.decode("ascii"),
            "binding_tag": self.binding_tag.decode("ascii"),
            "challenge_tag": self.challenge_tag.decode("ascii"),
            "address_tag": self.address_tag.decode("ascii"),
            "binding_rate": self.binding_rate,
            "challenge_rate": self.challenge_rate,
            "hrp": self.hrp,
        }

    @classmethod
    def from_dict(
        cls: Type[_Ciphersuite], dict_: Mapping[str, Any], check_validity: bool = True
    ) -> _Ciphersuite:

        curve_name = dict_["curve"]
        if curve_name not in CURVES:
            raise FROSTlibValueError(f"unknown curve: {curve_name}")

        return cls(
            dict_["name"],
            CURVES[curve_name],
            dict_["hash_name"],
            dict_["message_tag"],
            dict_["binding_tag"],
            dict_["challenge_tag"],
            dict_["address_tag"],
            dict_["binding_rate"],
            dict_["challenge_rate"],
            dict_["hrp"],
            check_validity,
        )

    def assert_valid(self) -> None:

        if not self.name:
            raise FROSTlibValueError("empty ciphersuite name")

        if self.hash_name not in HASH_FUNCTIONS:
            raise FROSTlibValueError(f"unknown hash function: {self.hash_name}")

        tags = [getattr(self, key) for key in _TAGS]
        for key, tag in zip(_TAGS, tags):
            if not tag:
                raise FROSTlibValueError(f"empty {key}")
        if len(set(tags)) != len(tags):
            raise FROSTlibValueError("domain separation tags must be distinct")

        for key in ("binding_rate", "challenge_rate"):
            rate = getattr(self, key)
            if not isinstance(rate, int) or rate < 1:
                raise FROSTlibValueError(f"invalid {key}: {rate}")
        if self.binding_rate == self.challenge_rate:
            raise FROSTlibValueError("binding and challenge rates must differ")

        if not self.hrp or not all(33 <= ord(x) <= 126 for x in self.hrp):
            raise FROSTlibValueError(f"invalid hrp: {self.hrp!r}")


def _tag_bytes(tag: String) -> bytes:
    return tag.encode("ascii") if isinstance(tag, str) else bytes(tag)


CIPHERSUITES: Dict[str, Ciphersuite] = {}
datadir = path.join(path.dirname(__file__), "_data")
for filename in (
    "frost_secp256k1_sha256",
    "frost_secp256k1_sha256_testnet",
    "frost_p256_sha256",
):
    with open(path.join(datadir, filename + ".json"), "r", encoding="ascii") as f:
        suite = Ciphersuite.from_dict(json.load(f))
        CIPHERSUITES[suite.name] = suite

FROST_SECP256K1 = CIPHERSUITES["FROST-secp256k1-SHA256"]


def ciphersuite_from_hrp(hrp: str) -> Ciphersuite:
    "Return the ciphersuite whose addresses use the given hrp."
    hrp = hrp.strip().lower()
    for suite in CIPHERSUITES.values():
        if suite.hrp == hrp:
            return suite
    raise FROSTlibValueError(f"unknown hrp: {hrp}")
