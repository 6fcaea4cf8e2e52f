# -*- coding: utf-8 -*-
"""
lunr_store
- Build the minimal-mistakes `assets/js/lunr/lunr-store.js` from a Jekyll source tree
- Read, validate and diff existing stores
"""
from __future__ import annotations

from .errors import (
    LunrStoreError, ConfigError, FrontMatterError, StoreValidationError, StoreFormatError,
)
from .store import PostRecord, build_records, validate, dumps_js, dumps_json, loads

__version__ = "0.3.0"

__all__ = [
    "LunrStoreError", "ConfigError", "FrontMatterError", "StoreValidationError", "StoreFormatError",
    "PostRecord", "build_records", "validate", "dumps_js", "dumps_json", "loads",
]
