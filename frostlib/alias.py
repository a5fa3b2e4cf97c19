#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Aliases

mypy aliases, documenting also coding input conventions.
"""

from typing import Any, Callable, Tuple, Union

# Octets are a sequence of eight-bit bytes or a hex-string (not text string)
#
# hex-strings are strings that can be converted to bytes using bytes.fromhex,
# e.g.:
# "deadbeef"
# "02 cc71eb30d653c0c3163990c47b976f3fb3f37cccdcbedb169a1dfef58bbfbfaf"
#
# use frostlib.utils.bytes_from_octets to convert Octets to bytes
#
# Octets are used for messages to be signed, serialized points,
# serialized signatures, etc.
Octets = Union[bytes, str]

# bytes or text string (not hex-string)
#
# this is for 'ascii' strings like bech32 addresses:
# "frost1q..."
#
# leading/trailing blanks should always be stripped
String = Union[bytes, str]

# hex-string or bytes representation of an int
Integer = Union[bytes, str, int]

# Hash digest constructor: it may be any hashlib constructor, e.g. sha256
HashF = Callable[[], Any]

# Randomness source: given a size, it returns that many random bytes,
# e.g. secrets.token_bytes or random.Random(42).randbytes
RandomBytes = Callable[[int], bytes]

# Elliptic curve point in affine coordinates.
# Warning: to make Point a NamedTuple would slow down the code
Point = Tuple[int, int]

# Note that the infinity point in affine coordinates is INF = (int, 0)
# (no affine point has y=0 coordinate in a group of prime order).
# It can be checked with 'INF[1] == 0'
# The x-coordinate is arbitrary: 5 is preferred
# because it is not a valid x-coordinate in secp256k1
INF = 5, 0

# Elliptic curve point in Jacobian coordinates.
JacPoint = Tuple[int, int, int]

# Infinity point in Jacobian coordinates is INFJ = (int, int, 0).
# It can be checked with 'INFJ[2] == 0'
INFJ = 7, 0, 0
