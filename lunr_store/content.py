# -*- coding: utf-8 -*-
"""
Scan a Jekyll source tree:
- _posts/ (optionally under category dirs: blog/_posts/2020-12-20-foo.md)
- other collections configured with `output: true` (_docs/, _recipes/, ...)
- pages with `search: true` when lunr.search_within_pages is on
Returns documents in the order the lunr store template walks them.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path

from . import front_matter
from .config import SiteConfig

MARKDOWN_EXTS = {".md", ".markdown", ".mkdown", ".mkdn", ".mkd"}
PAGE_EXTS = MARKDOWN_EXTS | {".html", ".htm"}

POST_NAME_RE = re.compile(r"^(?P<date>\d{2,4}-\d{1,2}-\d{1,2})-(?P<slug>.+?)(?P<ext>\.[^.]+)$")

DEFAULT_EXCLUDE = [
    ".sass-cache", ".jekyll-cache", "gemfiles", "Gemfile", "Gemfile.lock",
    "node_modules", "vendor/bundle", "vendor/cache", "vendor/gems", "vendor/ruby",
]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M %z",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
)


@dataclass
class Document:
    path: Path                      # absolute source path
    rel: str                        # path relative to the site root (posix)
    collection: str                 # "posts", a collection label, or "pages"
    data: dict                      # front matter
    body: str
    slug: str
    ext: str
    date: datetime | None = None
    categories: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    title: str = ""

    @property
    def is_markdown(self) -> bool:
        return self.ext.lower() in MARKDOWN_EXTS

    @property
    def output_ext(self) -> str:
        return ".html"


# ========= front matter helpers =========
def parse_date(value) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    s = str(value).strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(s)
    except ValueError:
        return None


def as_list(value, split: bool = True) -> list[str]:
    """`categories: a b` and `categories: [a, b]` are both allowed; `category: A B` is one value."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None and str(v) != ""]
    s = str(value).strip()
    if not split:
        return [s] if s else []
    return s.split()


def unique(items) -> list[str]:
    seen = set()
    out = []
    for x in items:
        if x not in seen:
            seen.add(x)
            out.append(x)
    return out


def first_heading_title(s: str, fallback: str) -> str:
    m = re.search(r"^\s*#{1,6}\s+(.+?)\s*#*\s*$", s, flags=re.M)
    return m.group(1).strip() if m else fallback


def titleize_slug(slug: str) -> str:
    return " ".join(w.capitalize() for w in slug.split("-") if w)


def sort_key(d: Document):
    # naive dates are local time
    when = d.date.astimezone(timezone.utc) if d.date else EPOCH
    return (when, d.slug)


def is_future(d: Document, now: datetime | None = None) -> bool:
    if d.date is None:
        return False
    if d.date.tzinfo is not None:
        return d.date > (now or datetime.now(timezone.utc)).astimezone(d.date.tzinfo)
    return d.date > (now.replace(tzinfo=None) if now else datetime.now())


def is_searchable(d: Document) -> bool:
    return d.data.get("search") is not False and d.data.get("published") is not False


# ========= walking =========
def _excluded(rel: str, patterns: list[str]) -> bool:
    return any(rel == p or rel.startswith(p + "/") for p in patterns)


def _hidden(parts) -> bool:
    return any(part.startswith((".", "_", "#")) or part.endswith("~") for part in parts)


def iter_post_files(root: Path, exclude: list[str]):
    """Yield (path, category dirs) for every file under any `_posts` dir."""
    for posts_dir in sorted(root.rglob("_posts")):
        if not posts_dir.is_dir():
            continue
        rel_dir = posts_dir.relative_to(root)
        outer = rel_dir.parts[:-1]
        if _hidden(outer) or _excluded(rel_dir.as_posix(), exclude):
            continue
        for p in sorted(posts_dir.rglob("*")):
            if p.is_file() and not _hidden(p.relative_to(posts_dir).parts):
                yield p, list(outer)


def load_post(root: Path, p: Path, dir_categories: list[str]) -> Document | None:
    m = POST_NAME_RE.match(p.name)
    if not m:
        print(f"[skip] {p.relative_to(root).as_posix()}: not a YYYY-MM-DD-title post name")
        return None
    raw = front_matter.read_text(p)
    if not front_matter.has_front_matter(raw):
        return None
    data, body = front_matter.split_front_matter(raw, p)
    slug = str(data.get("slug") or m.group("slug"))
    when = parse_date(data.get("date")) or parse_date(m.group("date"))
    cats = unique(dir_categories + as_list(data.get("category"), split=False) + as_list(data.get("categories")))
    tags = unique(as_list(data.get("tag"), split=False) + as_list(data.get("tags")))
    title = data.get("title")
    return Document(
        path=p,
        rel=p.relative_to(root).as_posix(),
        collection="posts",
        data=data,
        body=body,
        slug=slug,
        ext=m.group("ext"),
        date=when,
        categories=cats,
        tags=tags,
        title=str(title) if title not in (None, "") else titleize_slug(m.group("slug")),
    )


def load_document(root: Path, p: Path, collection: str) -> Document | None:
    raw = front_matter.read_text(p)
    if not front_matter.has_front_matter(raw):
        return None
    data, body = front_matter.split_front_matter(raw, p)
    title = data.get("title")
    return Document(
        path=p,
        rel=p.relative_to(root).as_posix(),
        collection=collection,
        data=data,
        body=body,
        slug=str(data.get("slug") or p.stem),
        ext=p.suffix,
        date=parse_date(data.get("date")),
        categories=unique(as_list(data.get("category"), split=False) + as_list(data.get("categories"))),
        tags=unique(as_list(data.get("tag"), split=False) + as_list(data.get("tags"))),
        title=str(title) if title not in (None, "") else first_heading_title(body, p.stem),
    )


def scan_posts(root: Path, config: SiteConfig, now: datetime | None = None) -> list[Document]:
    exclude = DEFAULT_EXCLUDE + config.exclude
    docs = []
    for p, cats in iter_post_files(root, exclude):
        d = load_post(root, p, cats)
        if d is None:
            continue
        if not config.future and is_future(d, now):
            print(f"[skip] {d.rel}: dated in the future")
            continue
        docs.append(d)
    docs.sort(key=sort_key)
    return docs


def scan_collection(root: Path, label: str, config: SiteConfig) -> list[Document]:
    base = root / f"_{label}"
    if not base.is_dir():
        return []
    docs = []
    for p in sorted(base.rglob("*")):
        if not p.is_file() or _hidden(p.relative_to(base).parts):
            continue
        d = load_document(root, p, label)
        if d is not None:
            docs.append(d)
    docs.sort(key=lambda d: d.rel)
    return docs


def scan_pages(root: Path, config: SiteConfig) -> list[Document]:
    exclude = DEFAULT_EXCLUDE + config.exclude
    docs = []
    for p in sorted(root.rglob("*")):
        if not p.is_file() or p.suffix.lower() not in PAGE_EXTS:
            continue
        rel = p.relative_to(root)
        if _hidden(rel.parts) or _excluded(rel.as_posix(), exclude):
            continue
        d = load_document(root, p, "pages")
        # pages are opt-in: `search: true`
        if d is not None and d.data.get("search") is True:
            docs.append(d)
    return docs


def scan_site(root: Path, config: SiteConfig, now: datetime | None = None) -> list[Document]:
    root = Path(root)
    docs: list[Document] = []
    for label, opts in config.collections.items():
        if label == "posts":
            found = scan_posts(root, config, now)
        elif opts.get("output"):
            found = scan_collection(root, label, config)
        else:
            continue
        kept = [d for d in found if is_searchable(d)]
        print(f"[scan] {label}: {len(kept)} document(s) ({len(found) - len(kept)} hidden from search)")
        docs.extend(kept)
    if config.search_within_pages:
        pages = [d for d in scan_pages(root, config) if d.data.get("published") is not False]
        print(f"[scan] pages: {len(pages)} document(s)")
        docs.extend(pages)
    return docs
