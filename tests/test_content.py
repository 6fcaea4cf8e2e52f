from datetime import datetime

from lunr_store.config import load_config
from lunr_store.content import as_list, parse_date, scan_site, titleize_slug

NOW = datetime(2021, 6, 1)


def build_blog(site):
    site.config("""
        collections:
          docs:
            output: true
          recipes:
            output: false
        lunr:
          search_within_pages: true
    """)
    site.post("2020-12-26-build-my-jekyll-blog.md", """
        title: Build my Jekyll blog with bare GitHub Actions
        categories: blog
    """, folder="_posts")
    site.post("2020-12-20-make-decisions.md", """
        title: Make decisions about a blogging system
    """, folder="blog/_posts")
    site.post("2021-01-10-hidden.md", "title: Hidden\nsearch: false")
    site.post("2021-01-11-unpublished.md", "title: Unpublished\npublished: false")
    site.post("2021-12-31-future.md", "title: Not yet")
    site.post("notes.md", "title: Badly named")
    site.post("2021-01-01-draft.md", "title: Draft", folder="_drafts")
    site.post("2020-01-01-built.md", "title: Built copy", folder="_site/blog/_posts")
    site.write("_posts/2021-02-02-plain.md", "no front matter here\n")
    site.post("setup.md", "title: Setup", folder="_docs")
    site.post("soup.md", "title: Soup", folder="_recipes")
    site.write("about.md", "---\ntitle: About\nsearch: true\n---\nAbout me.\n")
    site.write("contact.md", "---\ntitle: Contact\n---\nMail me.\n")
    site.write("_includes/snippet.md", "---\nsearch: true\n---\nx\n")


def test_scan_site_order_and_filters(site):
    build_blog(site)
    docs = scan_site(site.root, load_config(site.root), now=NOW)
    assert [d.title for d in docs] == [
        "Make decisions about a blogging system",
        "Build my Jekyll blog with bare GitHub Actions",
        "Setup",
        "About",
    ]
    assert [d.collection for d in docs] == ["posts", "posts", "docs", "pages"]


def test_future_posts_are_kept_when_enabled(site):
    build_blog(site)
    config = load_config(site.root)
    config.future = True
    titles = [d.title for d in scan_site(site.root, config, now=NOW)]
    assert "Not yet" in titles


def test_post_categories_from_directories_and_front_matter(site):
    site.post("2021-03-25-streams.md", "title: Streams\ncategories: [java, blog]\ntags: streams readability", folder="blog/_posts")
    site.post("2021-03-26-single.md", "title: Single\ncategory: Java Tips")
    docs = scan_site(site.root, load_config(site.root), now=NOW)
    assert docs[0].categories == ["blog", "java"]
    assert docs[0].tags == ["streams", "readability"]
    assert docs[1].categories == ["Java Tips"]
    assert docs[1].tags == []


def test_post_date_and_slug(site):
    site.post("2021-05-02-release-memory.md", 'title: Memory\ndate: "2021-05-02 21:15:00 +0200"')
    site.post("2021-05-03-untitled-post-here.md", "layout: single")
    docs = scan_site(site.root, load_config(site.root), now=NOW)
    first, second = docs
    assert first.slug == "release-memory"
    assert (first.date.year, first.date.month, first.date.day, first.date.hour) == (2021, 5, 2, 21)
    assert first.date.tzinfo is not None
    assert second.date == datetime(2021, 5, 3)
    assert second.title == "Untitled Post Here"


def test_collection_title_falls_back_to_heading(site):
    site.config("collections:\n  docs:\n    output: true\n")
    site.write("_docs/guide.md", "---\nlayout: single\n---\n# The Guide\n\ntext\n")
    docs = scan_site(site.root, load_config(site.root), now=NOW)
    assert docs[0].title == "The Guide"


def test_exclude_from_config(site):
    site.config("exclude: [archive]\n")
    site.post("2020-01-01-old.md", "title: Old", folder="archive/_posts")
    site.post("2020-01-02-new.md", "title: New")
    assert [d.title for d in scan_site(site.root, load_config(site.root), now=NOW)] == ["New"]


def test_helpers():
    assert as_list("a b") == ["a", "b"]
    assert as_list(["a", None, 3]) == ["a", "3"]
    assert as_list(None) == []
    assert parse_date("2020-12-20") == datetime(2020, 12, 20)
    assert parse_date("not a date") is None
    assert titleize_slug("make-decisions") == "Make Decisions"


def test_posts_sort_on_the_instant_not_the_wall_clock(site):
    site.post("2021-05-02-west.md", 'title: West\ndate: "2021-05-02 23:00:00 -0500"')
    site.post("2021-05-03-utc.md", 'title: Utc\ndate: "2021-05-03 01:00:00 +0000"')
    docs = scan_site(site.root, load_config(site.root), now=NOW)
    assert [d.title for d in docs] == ["Utc", "West"]


def test_missing_title_capitalizes_like_jekyll(site):
    site.post("2021-05-03-my-JVM-notes.md", "layout: single")
    (doc,) = scan_site(site.root, load_config(site.root), now=NOW)
    assert doc.title == "My Jvm Notes"
    assert titleize_slug("MAKE-decisions") == "Make Decisions"
