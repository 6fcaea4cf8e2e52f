# -*- coding: utf-8 -*-
"""
Search excerpt, equivalent to the theme's Liquid chain:
    content | markdownify | newline_to_br | replace:"<br />"," " | replace:"</p>"," " ...
            | strip_html | strip_newlines | truncatewords: 50
Text with CJK characters has no spaces between words, so in `auto` mode it is
word-counted with jieba instead of str.split().
"""
from __future__ import annotations

import html
import re

import markdown

from .config import SiteConfig

TRUNCATE_STRING = "..."

LIQUID_RE = re.compile(r"\{%-?.*?-?%\}|\{\{-?.*?-?\}\}", flags=re.S)
BLOCK_END_RE = re.compile(r"<br\s*/?>|</p>|</h[1-6]>", flags=re.I)
SCRIPT_RE = re.compile(r"<script.*?</script>|<style.*?</style>|<!--.*?-->", flags=re.S | re.I)
TAG_RE = re.compile(r"<.*?>", flags=re.S)
CJK_RE = re.compile(r"[\u3040-\u30ff\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff\uac00-\ud7af]")

MARKDOWN_EXTENSIONS = ["extra", "smarty", "sane_lists"]


def markdownify(text: str) -> str:
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS, output_format="html")


def strip_liquid(text: str) -> str:
    return LIQUID_RE.sub("", text)


def strip_html(s: str) -> str:
    s = SCRIPT_RE.sub("", s)
    return TAG_RE.sub("", s)


def strip_newlines(s: str) -> str:
    return re.sub(r"\r?\n", "", s)


def has_cjk(s: str) -> bool:
    return CJK_RE.search(s) is not None


def is_word(tok: str) -> bool:
    return any(ch.isalnum() for ch in tok)


def truncatewords(s: str, words: int, segmenter: str = "auto") -> str:
    if segmenter == "auto" and has_cjk(s):
        return truncate_segmented(s, words)
    wordlist = s.split()
    if len(wordlist) <= words:
        return s
    return " ".join(wordlist[:words]) + TRUNCATE_STRING


def truncate_segmented(s: str, words: int) -> str:
    import jieba

    out = []
    count = 0
    for tok in jieba.cut(s):
        if is_word(tok):
            if count == words:
                return "".join(out).rstrip() + TRUNCATE_STRING
            count += 1
        out.append(tok)
    return s


def unescaped_text(body: str, is_markdown: bool = True) -> str:
    s = strip_liquid(body)
    if is_markdown:
        s = markdownify(s)
    # newline_to_br followed by the theme's replace filters leaves a space per line break
    s = s.replace("\n", " \n")
    s = BLOCK_END_RE.sub(" ", s)
    s = strip_html(s)
    return strip_newlines(html.unescape(s))


def plain_text(body: str, is_markdown: bool = True) -> str:
    return html.escape(unescaped_text(body, is_markdown), quote=False)


def make_excerpt(body: str, config: SiteConfig, is_markdown: bool = True) -> str:
    # words are counted on decoded text so an entity is never split or counted
    s = unescaped_text(body, is_markdown)
    if not config.search_full_content:
        s = truncatewords(s, config.excerpt_words, config.segmenter)
    return html.escape(s, quote=False)
