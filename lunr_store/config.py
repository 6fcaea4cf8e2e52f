# -*- coding: utf-8 -*-
"""
Site configuration:
- read <root>/_config.yml (PyYAML); a missing file means Jekyll defaults
- only the keys the lunr store template looks at are kept
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .errors import ConfigError

CONFIG_NAME = "_config.yml"

URL_MODES = ("relative", "absolute")
SEGMENTERS = ("auto", "whitespace")


@dataclass
class SiteConfig:
    url: str = ""
    baseurl: str = ""
    permalink: str = "date"
    teaser: str | None = None
    search_full_content: bool = False
    search_within_pages: bool = False
    excerpt_words: int = 50
    url_mode: str = "relative"
    future: bool = False
    segmenter: str = "auto"
    exclude: list[str] = field(default_factory=list)
    # name -> {"output": bool, "permalink": str | None}; "posts" is always present
    collections: dict[str, dict] = field(default_factory=lambda: {"posts": {"output": True}})


def _as_bool(data: dict, key: str, default: bool) -> bool:
    v = data.get(key, default)
    if v is None:
        return default
    if not isinstance(v, bool):
        raise ConfigError(f"{key}: expected true/false, got {v!r}")
    return v


def _collections(raw) -> dict[str, dict]:
    out: dict[str, dict] = {"posts": {"output": True}}
    if raw is None:
        return out
    # Jekyll also accepts a plain list of collection names
    if isinstance(raw, list):
        raw = {str(name): {} for name in raw}
    if not isinstance(raw, dict):
        raise ConfigError(f"collections: expected a mapping, got {type(raw).__name__}")
    for name, opts in raw.items():
        opts = opts or {}
        if not isinstance(opts, dict):
            raise ConfigError(f"collections.{name}: expected a mapping")
        entry = {
            "output": bool(opts.get("output", name == "posts")),
            "permalink": opts.get("permalink"),
        }
        out[str(name)] = {**out.get(str(name), {}), **entry}
    return out


def config_from_mapping(data: dict) -> SiteConfig:
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_NAME}: top level must be a mapping")

    lunr = data.get("lunr") or {}
    if not isinstance(lunr, dict):
        raise ConfigError("lunr: expected a mapping")

    url_mode = data.get("url_mode", "relative")
    if url_mode not in URL_MODES:
        raise ConfigError(f"url_mode: expected one of {', '.join(URL_MODES)}, got {url_mode!r}")
    segmenter = data.get("segmenter", "auto")
    if segmenter not in SEGMENTERS:
        raise ConfigError(f"segmenter: expected one of {', '.join(SEGMENTERS)}, got {segmenter!r}")

    words = data.get("excerpt_words", 50)
    if not isinstance(words, int) or isinstance(words, bool) or words < 1:
        raise ConfigError(f"excerpt_words: expected a positive integer, got {words!r}")

    exclude = data.get("exclude") or []
    if not isinstance(exclude, list):
        raise ConfigError("exclude: expected a list of paths")

    teaser = data.get("teaser")
    return SiteConfig(
        url=str(data.get("url") or "").rstrip("/"),
        baseurl=str(data.get("baseurl") or "").rstrip("/"),
        permalink=str(data.get("permalink") or "date"),
        teaser=str(teaser) if teaser else None,
        search_full_content=_as_bool(data, "search_full_content", False),
        search_within_pages=_as_bool(lunr, "search_within_pages", False),
        excerpt_words=words,
        url_mode=url_mode,
        future=_as_bool(data, "future", False),
        segmenter=segmenter,
        exclude=[str(x).strip("/") for x in exclude],
        collections=_collections(data.get("collections")),
    )


def load_config(root: Path) -> SiteConfig:
    p = Path(root) / CONFIG_NAME
    if not p.exists():
        return SiteConfig()
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"{p}: invalid YAML ({e})") from e
    return config_from_mapping(data or {})
