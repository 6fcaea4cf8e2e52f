#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
build_store.py
- build: scan a Jekyll source tree, write assets/js/lunr/lunr-store.js (+ optional JSON copy)
- check: read an existing store and validate it
- diff:  compare two stores, reporting URL-format drift apart from content changes
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from .config import load_config
from .content import scan_site
from .errors import LunrStoreError
from .store import build_records, diff_stores, read_store, validate, write_store

DEFAULT_OUT = Path("assets") / "js" / "lunr" / "lunr-store.js"

app = typer.Typer(add_completion=False, help="Generate the lunr search store for a Jekyll blog.")


def fail(e: LunrStoreError) -> None:
    print(f"[error] {e}")
    raise typer.Exit(1)


@app.command()
def build(
    root: Path = typer.Argument(Path("."), help="Jekyll source root (contains _config.yml)."),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Store path (default: <root>/assets/js/lunr/lunr-store.js)."),
    json_out: Optional[Path] = typer.Option(None, "--json", help="Also write the records as plain JSON."),
    absolute: bool = typer.Option(False, "--absolute", help="Emit absolute URLs (site url + baseurl)."),
    full_content: bool = typer.Option(False, "--full-content", help="Do not truncate excerpts."),
):
    root = root.resolve()
    if not root.is_dir():
        print("[error] source root does not exist:", root)
        raise typer.Exit(1)
    try:
        config = load_config(root)
        if absolute:
            config.url_mode = "absolute"
        if full_content:
            config.search_full_content = True
        docs = scan_site(root, config)
        records = validate(build_records(docs, config))
    except LunrStoreError as e:
        fail(e)

    target = write_store(out or root / DEFAULT_OUT, records)
    print(f"[ok] write: {target} ({len(records)} record(s))")
    if json_out:
        print(f"[ok] write: {write_store(json_out, records, fmt='json')}")


@app.command()
def check(store: Path = typer.Argument(..., exists=True, dir_okay=False, help="lunr-store.js or store.json")):
    try:
        records = validate(read_store(store))
    except LunrStoreError as e:
        fail(e)
    print(f"[ok] {store}: {len(records)} record(s)")


@app.command()
def diff(
    old: Path = typer.Argument(..., exists=True, dir_okay=False),
    new: Path = typer.Argument(..., exists=True, dir_okay=False),
):
    try:
        d = diff_stores(read_store(old), read_store(new))
    except LunrStoreError as e:
        fail(e)
    for url in d.added:
        print("[added]", url)
    for url in d.removed:
        print("[removed]", url)
    for url, fields in d.changed.items():
        print("[changed]", url, ",".join(fields))
    for a, b in d.collisions:
        print("[collision]", a, "and", b, "are the same post")
    for a, b in d.url_drift:
        print("[url]", a, "->", b)
    if d.empty:
        print("[ok] stores are identical")
    elif not d.content_changed:
        print("[ok] only URL format differs")
    raise typer.Exit(1 if d.content_changed else 0)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
