# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .store import INITIALIZE_FAILED_MESSAGE, SessionStore

__all__ = ["INITIALIZE_FAILED_MESSAGE", "SessionStore"]
