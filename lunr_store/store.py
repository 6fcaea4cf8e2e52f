# -*- coding: utf-8 -*-
"""
The lunr store: one flat record per searchable document.

    var store = [{
            "title": "...",
            "excerpt":"...","categories": ["blog"],
            "tags": [],
            "url": "/blog/2020/12/20/some-post.html",
            "teaser": null
          },{ ... }]

Field names and order are what the search widget reads, so they never change.
"""
from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlsplit

from .config import SiteConfig
from .content import Document
from .errors import StoreFormatError, StoreValidationError
from .excerpt import make_excerpt
from .permalink import document_url, site_url

FIELDS = ("title", "excerpt", "categories", "tags", "url", "teaser")
JS_RE = re.compile(r"\A\s*var\s+store\s*=\s*(?P<body>.*?)\s*;?\s*\Z", flags=re.S)


@dataclass
class PostRecord:
    title: str
    excerpt: str
    categories: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    url: str = ""
    teaser: str | None = None

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "excerpt": self.excerpt,
            "categories": list(self.categories),
            "tags": list(self.tags),
            "url": self.url,
            "teaser": self.teaser,
        }

    @classmethod
    def from_dict(cls, d: dict, index: int = 0) -> "PostRecord":
        if not isinstance(d, dict):
            raise StoreFormatError(f"record {index}: expected an object, got {type(d).__name__}")
        missing = [k for k in FIELDS if k not in d]
        extra = [k for k in d if k not in FIELDS]
        if missing:
            raise StoreFormatError(f"record {index}: missing field(s) {', '.join(missing)}")
        if extra:
            raise StoreFormatError(f"record {index}: unknown field(s) {', '.join(extra)}")
        return cls(
            title=d["title"],
            excerpt=d["excerpt"],
            categories=d["categories"],
            tags=d["tags"],
            url=d["url"],
            teaser=d["teaser"],
        )


# ========= build =========
def teaser_for(doc: Document, config: SiteConfig) -> str | None:
    header = doc.data.get("header")
    teaser = header.get("teaser") if isinstance(header, dict) else None
    teaser = teaser or config.teaser
    return site_url(str(teaser), config) if teaser else None


def build_record(doc: Document, config: SiteConfig) -> PostRecord:
    excerpt = make_excerpt(doc.body, config, doc.is_markdown)
    if not excerpt.strip():
        print(f"[warn] {doc.rel}: empty content, excerpt falls back to the title")
        excerpt = doc.title
    return PostRecord(
        title=doc.title,
        excerpt=excerpt,
        categories=list(doc.categories),
        tags=list(doc.tags),
        url=site_url(document_url(doc, config), config),
        teaser=teaser_for(doc, config),
    )


def build_records(docs: list[Document], config: SiteConfig) -> list[PostRecord]:
    return [build_record(d, config) for d in docs]


# ========= validate =========
def validate(records: list[PostRecord]) -> list[PostRecord]:
    problems = []
    seen: dict[str, int] = {}
    for i, r in enumerate(records):
        where = f"record {i}" + (f" ({r.url})" if isinstance(r.url, str) and r.url else "")
        if not isinstance(r.url, str) or not r.url:
            problems.append(f"{where}: url is empty")
        elif r.url in seen:
            problems.append(f"{where}: url duplicates record {seen[r.url]}")
        else:
            seen[r.url] = i
        if not isinstance(r.title, str) or not r.title.strip():
            problems.append(f"{where}: title is empty")
        if not isinstance(r.excerpt, str) or not r.excerpt.strip():
            problems.append(f"{where}: excerpt is empty")
        for name in ("categories", "tags"):
            value = getattr(r, name)
            if not isinstance(value, list) or not all(isinstance(x, str) for x in value):
                problems.append(f"{where}: {name} must be a list of strings")
        if r.teaser is not None and (not isinstance(r.teaser, str) or not r.teaser):
            problems.append(f"{where}: teaser must be null or a non-empty string")
    if problems:
        raise StoreValidationError(problems)
    return records


# ========= serialize =========
def _json(v) -> str:
    return json.dumps(v, ensure_ascii=False)


def _json_list(v) -> str:
    return json.dumps(list(v), ensure_ascii=False, separators=(",", ":"))


def _js_record(r: PostRecord) -> str:
    return (
        "{\n"
        f'        "title": {_json(r.title)},\n'
        f'        "excerpt":{_json(r.excerpt)},"categories": {_json_list(r.categories)},\n'
        f'        "tags": {_json_list(r.tags)},\n'
        f'        "url": {_json(r.url)},\n'
        f'        "teaser": {_json(r.teaser)}\n'
        "      }"
    )


def dumps_js(records: list[PostRecord]) -> str:
    return "var store = [" + ",".join(_js_record(r) for r in records) + "]\n"


def dumps_json(records: list[PostRecord]) -> str:
    return json.dumps([r.to_dict() for r in records], ensure_ascii=False, indent=2) + "\n"


def loads(text: str) -> list[PostRecord]:
    m = JS_RE.match(text)
    body = m.group("body") if m else text
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        raise StoreFormatError(f"not a lunr store: {e}") from e
    if not isinstance(data, list):
        raise StoreFormatError(f"store must be an array, got {type(data).__name__}")
    return [PostRecord.from_dict(d, i) for i, d in enumerate(data)]


def read_store(p: Path) -> list[PostRecord]:
    return loads(Path(p).read_text(encoding="utf-8"))


def write_store(p: Path, records: list[PostRecord], fmt: str = "js") -> Path:
    p = Path(p)
    text = dumps_json(records) if fmt == "json" else dumps_js(records)
    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_name(p.name + ".tmp")
    tmp.write_text(text, encoding="utf-8")
    os.replace(tmp, p)
    return p


# ========= diff =========
def url_key(url: str) -> str:
    """Same post regardless of host, trailing `.html` or trailing slash."""
    path = urlsplit(url).path or "/"
    if path.endswith(".html"):
        path = path[: -len(".html")]
    return path.rstrip("/") or "/"


@dataclass
class StoreDiff:
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    changed: dict[str, list[str]] = field(default_factory=dict)   # url -> changed fields
    url_drift: list[tuple[str, str]] = field(default_factory=list)
    # (kept url, ignored url) pairs from one store that normalise to the same key
    collisions: list[tuple[str, str]] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not (self.added or self.removed or self.changed or self.url_drift or self.collisions)

    @property
    def content_changed(self) -> bool:
        return bool(self.added or self.removed or self.changed or self.collisions)


def _by_key(records: list[PostRecord], collisions: list[tuple[str, str]]) -> dict[str, PostRecord]:
    out: dict[str, PostRecord] = {}
    for r in records:
        key = url_key(r.url)
        if key in out:
            collisions.append((out[key].url, r.url))
            continue
        out[key] = r
    return out


def diff_stores(old: list[PostRecord], new: list[PostRecord]) -> StoreDiff:
    out = StoreDiff()
    before = _by_key(old, out.collisions)
    after = _by_key(new, out.collisions)
    for key, r in after.items():
        if key not in before:
            out.added.append(r.url)
    for key, r in before.items():
        if key not in after:
            out.removed.append(r.url)
            continue
        n = after[key]
        if n.url != r.url:
            out.url_drift.append((r.url, n.url))
        fields = [f for f in FIELDS if f != "url" and getattr(r, f) != getattr(n, f)]
        if fields:
            out.changed[n.url] = fields
    return out
