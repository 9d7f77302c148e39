# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import ClientConfig, HttpConfig, StorageConfig, load_config

__all__ = ["ClientConfig", "HttpConfig", "StorageConfig", "load_config"]
