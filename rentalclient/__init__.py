# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Client-side session management for the vehicle rental backend."""

__version__ = "0.1.0"
