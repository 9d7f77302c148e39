# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig


from .logger import (
    correlation_scope,
    get_correlation_id,
    logger,
    setup_logging,
)
from .sensitive_filter import sanitize_message

__all__ = [
    "correlation_scope",
    "get_correlation_id",
    "logger",
    "sanitize_message",
    "setup_logging",
]
