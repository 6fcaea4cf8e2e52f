# -*- coding: utf-8 -*-
from __future__ import annotations


class LunrStoreError(Exception):
    """Base class for everything the build reports as `[error]`."""


class ConfigError(LunrStoreError):
    pass


class FrontMatterError(LunrStoreError):
    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class StoreFormatError(LunrStoreError):
    pass


class StoreValidationError(LunrStoreError):
    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        head = f"{len(self.problems)} problem(s) in store"
        super().__init__(head + "".join(f"\n  - {p}" for p in self.problems))
