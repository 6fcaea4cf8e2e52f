# -*- coding: utf-8 -*-
"""
Document URLs the way Jekyll derives them:
- front matter `permalink` > collection `permalink` > site `permalink`
- built-in styles: date / pretty / ordinal / weekdate / none
- relative_url / absolute_url filters for the final value
"""
from __future__ import annotations

import re
from urllib.parse import quote

from .config import SiteConfig
from .content import Document

STYLES = {
    "date": "/:categories/:year/:month/:day/:title:output_ext",
    "pretty": "/:categories/:year/:month/:day/:title/",
    "ordinal": "/:categories/:year/:y_day/:title:output_ext",
    "weekdate": "/:categories/:year/W:week/:short_day/:title:output_ext",
    "none": "/:categories/:title:output_ext",
}
COLLECTION_DEFAULT = "/:collection/:path:output_ext"

PLACEHOLDER_RE = re.compile(r":([a-z_]+)")
SCHEME_RE = re.compile(r"^(?:[a-zA-Z][a-zA-Z0-9+.-]*:|//)")
SAFE_CHARS = "/:@!$&'()*+,;=-._~"


def slugify(s: str) -> str:
    s = re.sub(r"[^\w]+", "-", s.strip().lower())
    return re.sub(r"-{2,}", "-", s).strip("-")


def resolve_template(tpl: str) -> str:
    return STYLES.get(tpl, tpl)


def template_for(doc: Document, config: SiteConfig) -> str:
    if doc.data.get("permalink"):
        return str(doc.data["permalink"])
    if doc.collection == "pages":
        return "/:path/" if resolve_template(config.permalink).endswith("/") else "/:path:output_ext"
    coll = config.collections.get(doc.collection, {})
    if coll.get("permalink"):
        return resolve_template(str(coll["permalink"]))
    if doc.collection == "posts":
        return resolve_template(config.permalink)
    return COLLECTION_DEFAULT


def placeholders(doc: Document) -> dict[str, str]:
    rel_in_coll = doc.rel
    if doc.collection not in ("posts", "pages"):
        rel_in_coll = doc.rel.split("/", 1)[1] if "/" in doc.rel else doc.rel
    path = rel_in_coll.rsplit(".", 1)[0] if "." in rel_in_coll.rsplit("/", 1)[-1] else rel_in_coll
    stem = doc.path.stem
    values = {
        "categories": "/".join(unique_lower(doc.categories)),
        "collection": doc.collection,
        "path": path,
        "name": slugify(stem),
        "title": doc.slug,
        "slug": slugify(doc.slug),
        "output_ext": doc.output_ext,
    }
    d = doc.date
    if d is not None:
        values.update({
            "year": f"{d.year:04d}",
            "short_year": f"{d.year % 100:02d}",
            "month": f"{d.month:02d}",
            "i_month": str(d.month),
            "short_month": d.strftime("%b"),
            "long_month": d.strftime("%B"),
            "day": f"{d.day:02d}",
            "i_day": str(d.day),
            "y_day": f"{d.timetuple().tm_yday:03d}",
            "week": f"{d.isocalendar()[1]:02d}",
            "short_day": d.strftime("%a"),
            "long_day": d.strftime("%A"),
            "hour": f"{d.hour:02d}",
            "minute": f"{d.minute:02d}",
            "second": f"{d.second:02d}",
        })
    return values


def unique_lower(items) -> list[str]:
    out = []
    for c in items:
        c = str(c).lower()
        if c not in out:
            out.append(c)
    return out


def expand(tpl: str, values: dict[str, str]) -> str:
    url = PLACEHOLDER_RE.sub(lambda m: values.get(m.group(1), m.group(0)), tpl)
    url = re.sub(r"/{2,}", "/", "/" + url)
    # pages: /index.html and /about/index.html are served as directories
    if url.endswith("/index.html"):
        url = url[: -len("index.html")]
    elif url.endswith("/index/"):
        url = url[: -len("index/")]
    return quote(url, safe=SAFE_CHARS)


def document_url(doc: Document, config: SiteConfig) -> str:
    return expand(template_for(doc, config), placeholders(doc))


def relative_url(path: str, config: SiteConfig) -> str:
    if SCHEME_RE.match(path):
        return path
    return (config.baseurl + "/" + path.lstrip("/")) if path else (config.baseurl or "/")


def absolute_url(path: str, config: SiteConfig) -> str:
    if SCHEME_RE.match(path):
        return path
    return config.url + relative_url(path, config)


def site_url(path: str, config: SiteConfig) -> str:
    if config.url_mode == "absolute":
        return absolute_url(path, config)
    return relative_url(path, config)
