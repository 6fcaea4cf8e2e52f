# -*- coding: utf-8 -*-
"""
YAML front matter:
    ---
    title: ...
    categories: blog
    ---
    body...
Files without a leading fence have no front matter (Jekyll would copy them as static files).
"""
from __future__ import annotations

import re
from pathlib import Path

import yaml

from .errors import FrontMatterError

FENCE_RE = re.compile(r"\A---[ \t]*\r?\n(?P<yaml>.*?)^(?:---|\.\.\.)[ \t]*\r?$\n?", flags=re.S | re.M)


def read_text(p: Path) -> str:
    return p.read_text(encoding="utf-8", errors="ignore").lstrip("\ufeff")


def has_front_matter(s: str) -> bool:
    return FENCE_RE.match(s) is not None


def split_front_matter(s: str, path: Path | str = "<string>") -> tuple[dict, str]:
    m = FENCE_RE.match(s)
    if not m:
        return {}, s
    try:
        data = yaml.safe_load(m.group("yaml"))
    except yaml.YAMLError as e:
        raise FrontMatterError(path, f"invalid YAML front matter ({e})") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(path, "front matter must be a mapping")
    return data, s[m.end():]

