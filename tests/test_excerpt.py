from lunr_store.config import SiteConfig
from lunr_store.excerpt import has_cjk, make_excerpt, plain_text, strip_html, truncatewords


def test_plain_text_renders_markdown_and_strips_html():
    s = plain_text("# Heading\n\nI'm a *person* who [links](http://x).\n")
    assert "<" not in s
    assert "\n" not in s
    assert "Heading" in s
    assert "I’m a person who links." in s


def test_code_keeps_escaped_angle_brackets():
    body = "Let's start:\n\n```\nuserList.stream()\n  .filter(user -> user != null)\n```\n"
    s = plain_text(body)
    assert "-&gt;" in s
    assert "Let’s start:" in s


def test_block_ends_separate_words():
    s = plain_text("one\n\ntwo\n\n## three\n\nfour")
    assert s.split() == ["one", "two", "three", "four"]


def test_liquid_tags_are_dropped():
    s = plain_text("{% include toc %}\nBody {{ page.title }} text\n")
    assert s.split() == ["Body", "text"]


def test_strip_html_drops_scripts_and_comments():
    assert strip_html("<p>a<script>var x = 1;</script><!-- hidden -->b</p>") == "ab"


def test_truncatewords_like_liquid():
    text = " ".join(f"w{i}" for i in range(60))
    assert truncatewords(text, 50) == " ".join(f"w{i}" for i in range(50)) + "..."
    assert truncatewords("short  text", 50) == "short  text"


def test_excerpt_is_truncated_to_configured_words():
    body = " ".join(f"word{i}" for i in range(80))
    excerpt = make_excerpt(body, SiteConfig(excerpt_words=10))
    assert excerpt == " ".join(f"word{i}" for i in range(10)) + "..."


def test_full_content_is_not_truncated():
    body = " ".join(f"word{i}" for i in range(80))
    excerpt = make_excerpt(body, SiteConfig(search_full_content=True, excerpt_words=10))
    assert excerpt.split() == [f"word{i}" for i in range(80)]


def test_html_documents_are_not_markdownified():
    assert make_excerpt("<p>*literal*</p>", SiteConfig(), is_markdown=False).strip() == "*literal*"


def test_cjk_text_is_word_counted_with_jieba():
    text = "我爱北京天安门。" * 20
    assert has_cjk(text)
    out = truncatewords(text, 5)
    assert out.endswith("...")
    assert text.startswith(out[:-3])
    assert len(out) < len(text)


def test_whitespace_segmenter_counts_cjk_runs_as_one_word():
    text = "我爱北京天安门。" * 20
    assert truncatewords(text, 5, segmenter="whitespace") == text


def test_cjk_word_count_ignores_entities():
    config = SiteConfig(excerpt_words=2)
    assert make_excerpt("北京 -> 上海", config).strip() == "北京 -&gt; 上海"


def test_cjk_cut_never_splits_an_entity():
    body = "北京 -> 上海 " * 30
    excerpt = make_excerpt(body, SiteConfig(excerpt_words=5))
    assert excerpt.endswith("...")
    assert excerpt.count("&") == excerpt.count("&gt;")
    assert excerpt[:-3].rstrip().endswith(("北京", "上海"))
