#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"__init__ module for the frostlib package."

name = "frostlib"
__version__ = "2024.3.1"
__author__ = "The frostlib developers"
__author_email__ = "devs@frostlib.org"
__copyright__ = "Copyright (C) 2023-2024 The frostlib developers"
__license__ = "MIT License"
