#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

The three base classes are only meant to discriminate between Exceptions
raised by frostlib from those raised by other codebase:
users are usually better off just dealing with the regular
ValueError, TypeError, and RuntimeError from which they are derived.

The remaining classes classify signing failures:

* MissingDataError: a binding factor, commitment, partial signature,
  or share is absent for a given participant index
* DegenerateInterpolationError: the index set makes the Lagrange
  denominator non-invertible (duplicates, zero, missing signer)
* PrimitiveFailureError: hash-to-scalar or curve arithmetic failure
* RandomnessExhaustedError: nonce/key generation cannot proceed
* NonceReuseError: a signing nonce has already been consumed
* SessionStateError: operation not allowed in the current session state
"""


class FROSTlibValueError(ValueError):
    pass


class FROSTlibTypeError(TypeError):
    pass


class FROSTlibRuntimeError(RuntimeError):
    pass


class MissingDataError(FROSTlibValueError):
    pass


class DegenerateInterpolationError(FROSTlibValueError):
    pass


class PrimitiveFailureError(FROSTlibRuntimeError):
    pass


class RandomnessExhaustedError(FROSTlibRuntimeError):
    pass


class NonceReuseError(FROSTlibRuntimeError):
    pass


class SessionStateError(FROSTlibRuntimeError):
    pass
