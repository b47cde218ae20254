"""
Text feature extraction for browser tabs.

Derives the domain, subdomain, keywords and a rough category from a tab's
title, URL and page snippet, and builds the text fed to the embedding
function.
"""

import re
from collections import Counter
from typing import TYPE_CHECKING, Optional
from urllib.parse import urlparse

if TYPE_CHECKING:
    from tab_organizer.agents.models import Item

MAX_KEYWORDS = 15

KEYWORD_STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "is", "it", "this", "that", "from", "as", "are", "was",
    "were", "be", "been", "has", "have", "had", "do", "does", "did", "will",
    "would", "could", "should", "may", "might", "can", "your", "my", "our",
    "their", "his", "her", "its", "new", "all", "one", "two", "three", "http",
    "https", "www", "com", "org", "net", "io", "app", "web", "html",
    "untitled", "home", "page", "index", "about", "null", "undefined",
    "google", "chrome", "tab", "browser", "window", "view", "open", "close",
    "save", "edit", "delete", "click", "here", "more", "less", "back", "next",
    "first", "last", "login", "logout", "sign", "register", "account",
    "settings", "help", "just", "get", "see", "also", "use", "make", "know",
    "want", "need", "like", "way", "well", "after", "think",
})

# Title hits weigh 3, content hits 1
TITLE_CATEGORY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Documents": ("document", "spreadsheet", "presentation", "sheet", "slides", "word", "excel", "pdf"),
    "Design": ("figma", "design", "canva", "sketch", "adobe", "prototype", "mockup", "wireframe"),
    "Research": ("research", "study", "paper", "journal", "analysis", "thesis", "academic"),
    "Communication": ("chat", "message", "meeting", "calendar", "zoom", "teams", "conference"),
    "Reading": ("article", "blog", "post", "story", "guide", "tutorial", "news"),
    "Shopping": ("cart", "checkout", "shop", "buy", "price", "product", "order", "sale"),
    "Development": (
        "pull request", "issue", "commit", "code", "repository", "debug", "api",
        "developer", "javascript", "python", "react",
    ),
    "Email": ("inbox", "compose", "draft", "sent", "email", "mail"),
    "Video": ("watch", "video", "episode", "movie", "stream", "subscribe"),
    "Music": ("playlist", "album", "song", "artist", "music", "spotify"),
    "Finance": ("balance", "transaction", "payment", "invoice", "bank", "credit"),
    "AI": ("chatgpt", "claude", "ai", "prompt", "assistant", "copilot", "gemini", "llm"),
    "Social": ("feed", "timeline", "profile", "followers", "post", "comment", "share"),
    "Learning": ("course", "lesson", "learn", "education", "training", "certification"),
}

URL_CATEGORY_HINTS: dict[str, tuple[str, ...]] = {
    "Development": ("github.com", "gitlab.com", "stackoverflow.com", "localhost"),
    "Social": ("facebook.com", "twitter.com", "x.com", "instagram.com", "linkedin.com", "reddit.com"),
    "Video": ("youtube.com", "netflix.com", "twitch.tv"),
    "Email": ("mail.google.com", "outlook."),
    "Documents": ("docs.google.com", "sheets.google.com", "slides.google.com"),
    "AI": ("chat.openai.com", "claude.ai"),
    "Shopping": ("amazon.com", "ebay.com"),
}


def parse_hostname(url: str) -> str:
    """
    Lowercased hostname of a URL with a leading "www." removed.

    Returns an empty string for malformed URLs or URLs without a host.
    """
    if not url:
        return ""
    try:
        hostname = urlparse(url).hostname or ""
    except ValueError:
        return ""
    if hostname.startswith("www."):
        hostname = hostname[4:]
    return hostname


def extract_domain(url: str) -> str:
    """
    Extract the domain of a URL.

    Examples:
        https://www.github.com/user/repo → github.com
        https://app.slack.com/client → app.slack.com
    """
    return parse_hostname(url)


def extract_subdomain(url: str) -> str:
    """First hostname label when the hostname has more than two labels."""
    parts = parse_hostname(url).split(".")
    return parts[0] if len(parts) > 2 else ""


def base_domain_name(domain: str) -> str:
    """
    Main name of a domain: the second-to-last label.

    Examples:
        github.com → github
        app.slack.com → slack
        localhost → localhost
    """
    parts = domain.split(".")
    if len(parts) >= 2:
        return parts[-2]
    return parts[0]


def extract_keywords(title: str, content: str = "", limit: int = MAX_KEYWORDS) -> list[str]:
    """
    Extract keywords from a tab's title and page snippet.

    Words are lowercased, stripped of punctuation, filtered by length (3-19)
    and stop words, then ranked by frequency (first occurrence breaks ties).

    Args:
        title: Tab title
        content: Page content snippet
        limit: Maximum keywords to return (default: 15)

    Returns:
        Keywords, most frequent first
    """
    text = re.sub(r"[^a-z0-9\s]", " ", f"{title or ''} {content or ''}".lower())
    words = [w for w in text.split() if 2 < len(w) < 20 and w not in KEYWORD_STOP_WORDS]
    return [word for word, _ in Counter(words).most_common(limit)]


def detect_category(title: str, url: str, content: str = "") -> Optional[str]:
    """
    Guess a tab category from title and content keywords, then from the URL.

    Args:
        title: Tab title
        url: Tab URL
        content: Page content snippet

    Returns:
        Category label or None
    """
    title_lower = (title or "").lower()
    content_lower = (content or "").lower()

    best = None
    best_score = 0
    for category, keywords in TITLE_CATEGORY_KEYWORDS.items():
        score = 0
        for keyword in keywords:
            if keyword in title_lower:
                score += 3
            elif keyword in content_lower:
                score += 1
        if score > best_score:
            best_score = score
            best = category

    if best_score >= 2:
        return best

    url_lower = (url or "").lower()
    for category, hints in URL_CATEGORY_HINTS.items():
        if any(hint in url_lower for hint in hints):
            return category

    return None


def item_to_text(item: "Item", limit: int = 500) -> str:
    """Text used to embed a tab in the categorization pipeline (title, domain, content)."""
    return f"{item.title} {item.effective_domain} {item.content}".strip()[:limit]


def item_to_embedding_text(item: "Item") -> str:
    """Text used to embed a tab in the organize flow (title and URL)."""
    return f"{item.title} {item.url}".strip()
