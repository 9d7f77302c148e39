# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .interfaces import AuthApiPort, CredentialStorePort, SessionListener
from .session import INITIALIZE_FAILED_MESSAGE, SessionStore

__all__ = [
    "AuthApiPort",
    "CredentialStorePort",
    "INITIALIZE_FAILED_MESSAGE",
    "SessionListener",
    "SessionStore",
]
