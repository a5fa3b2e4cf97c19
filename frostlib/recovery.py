#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Reconstruction of the group secret from key shares.

WARNING: TEST AND EMERGENCY RECOVERY TOOLING ONLY.

Reconstructing the secret puts the whole signature private key
in a single place: this defeats the very purpose of threshold signing.
A live deployment must never call reconstruct_secret;
signing never needs it and none of the signing modules import it.

Every invocation requires an explicit reason
and it is logged at WARNING level.
"""

import logging
from typing import Optional, Sequence

from frostlib.curve import Curve, secp256k1
from frostlib.exceptions import FROSTlibValueError, MissingDataError
from frostlib.lagrange import lagrange_coefficient
from frostlib.sharing import KeyShare

_logger = logging.getLogger(__name__)


def reconstruct_secret(
    shares: Sequence[KeyShare],
    *,
    reason: str,
    ec: Curve = secp256k1,
    logger: Optional[logging.Logger] = None,
) -> int:
    """Return the secret interpolated at zero from the shares.

    At least threshold shares are needed for the correct result:
    fewer shares return an unrelated value, as there is no way to tell.
    """

    logger = logger or _logger
    if not reason or not reason.strip():
        raise FROSTlibValueError("secret reconstruction requires a reason")
    if not shares:
        raise MissingDataError("no shares")

    indices = [share.index for share in shares]
    logger.warning(
        "reconstructing group secret from shares %s: %s", indices, reason.strip()
    )

    secret = 0
    for share in shares:
        if share.ec is not ec:
            raise FROSTlibValueError(f"curve mismatch for share {share.index}")
        lam = lagrange_coefficient(share.index, indices, ec)
        secret = (secret + lam * share.secret_share) % ec.n
    return secret
