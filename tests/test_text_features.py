"""
Unit tests for tab text feature extraction and the Item model.
"""

import pytest

from tab_organizer.agents.models import Item, build_item
from tab_organizer.agents.text_features import (
    base_domain_name,
    detect_category,
    extract_domain,
    extract_keywords,
    extract_subdomain,
    item_to_embedding_text,
    item_to_text,
)


class TestDomains:
    """Tests for domain helpers."""

    def test_extract_domain_strips_www(self):
        assert extract_domain("https://www.github.com/user/repo") == "github.com"

    def test_extract_domain_keeps_subdomain(self):
        assert extract_domain("https://app.slack.com/client") == "app.slack.com"

    def test_extract_domain_malformed(self):
        assert extract_domain("http://[::1") == ""
        assert extract_domain("") == ""

    def test_extract_subdomain(self):
        assert extract_subdomain("https://app.slack.com/client") == "app"
        assert extract_subdomain("https://github.com") == ""

    @pytest.mark.parametrize(
        "domain,expected",
        [("github.com", "github"), ("app.slack.com", "slack"), ("localhost", "localhost")],
    )
    def test_base_domain_name(self, domain, expected):
        assert base_domain_name(domain) == expected


class TestKeywords:
    """Tests for extract_keywords()."""

    def test_ranked_by_frequency(self):
        keywords = extract_keywords("Python asyncio tutorial", "python python event loop")
        assert keywords[0] == "python"
        assert "asyncio" in keywords

    def test_stop_words_and_short_words_removed(self):
        keywords = extract_keywords("How to use the new API in an app")
        assert "the" not in keywords
        assert "new" not in keywords
        assert "to" not in keywords
        assert "api" in keywords

    def test_punctuation_removed(self):
        assert extract_keywords("React: hooks, state & effects!") == ["react", "hooks", "state", "effects"]

    def test_limit(self):
        title = " ".join(f"word{i:02d}" for i in range(30))
        assert len(extract_keywords(title)) == 15

    def test_empty(self):
        assert extract_keywords("", "") == []


class TestDetectCategory:
    """Tests for detect_category()."""

    def test_title_keyword(self):
        assert detect_category("Pull request #12", "https://example.com") == "Development"

    def test_content_alone_needs_two_hits(self):
        assert detect_category("Untitled", "https://example.com", "invoice") is None
        assert detect_category("Untitled", "https://example.com", "invoice payment") == "Finance"

    def test_url_fallback(self):
        assert detect_category("Untitled", "https://www.youtube.com/feed") == "Video"

    def test_no_signal(self):
        assert detect_category("zzz", "https://zzz.example") is None


class TestItem:
    """Tests for the Item model."""

    def test_build_item_derives_fields(self):
        item = build_item(7, "Pull request #12 · acme/api", "https://github.com/acme/api/pull/12")

        assert item.id == 7
        assert item.domain == "github.com"
        assert item.subdomain == ""
        assert "acme" in item.keywords
        assert item.category == "Development"

    def test_empty_title_becomes_untitled(self):
        item = build_item(1, "", "https://github.com/x")
        assert item.title == "Untitled"
        assert item.category == "Development"

    def test_effective_domain_from_url(self):
        item = Item(id=1, url="https://www.example.org/page")
        assert item.domain is None
        assert item.effective_domain == "example.org"

    def test_none_fields_become_defaults(self):
        item = Item(id="a", title=None, content=None, keywords=None)
        assert item.title == ""
        assert item.content == ""
        assert item.keywords == []

    def test_immutable(self):
        item = Item(id=1, title="x")
        with pytest.raises(Exception):
            item.title = "y"


class TestEmbeddingText:
    """Tests for the texts handed to the embedding function."""

    def test_item_to_text(self):
        item = Item(id=1, title="Docs", url="https://www.example.org/a", content="snippet")
        assert item_to_text(item) == "Docs example.org snippet"

    def test_item_to_text_truncated(self):
        item = Item(id=1, title="x" * 600)
        assert len(item_to_text(item)) == 500

    def test_item_to_embedding_text(self):
        item = Item(id=1, title="Docs", url="https://example.org/a")
        assert item_to_embedding_text(item) == "Docs https://example.org/a"
