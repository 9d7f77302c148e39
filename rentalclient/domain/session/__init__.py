# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .state import SessionOperation, SessionPhase, SessionState

__all__ = ["SessionOperation", "SessionPhase", "SessionState"]
