# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .chain import Handler, Stage, compose
from .request_logger import REQUEST_ID_HEADER, RequestLogStage

__all__ = ["Handler", "REQUEST_ID_HEADER", "RequestLogStage", "Stage", "compose"]
