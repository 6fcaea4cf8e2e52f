"""
Fixtures that lay out a small Jekyll source tree under tmp_path.
"""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest


class SiteBuilder:
    def __init__(self, root: Path):
        self.root = root

    def write(self, rel: str, text: str) -> Path:
        p = self.root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
        return p

    def config(self, text: str) -> Path:
        return self.write("_config.yml", text)

    def post(self, name: str, front: str = "", body: str = "Some words here.\n", folder: str = "_posts") -> Path:
        front = textwrap.dedent(front).strip("\n")
        return self.write(f"{folder}/{name}", f"---\n{front}\n---\n{textwrap.dedent(body)}")


@pytest.fixture
def site(tmp_path):
    return SiteBuilder(tmp_path)
