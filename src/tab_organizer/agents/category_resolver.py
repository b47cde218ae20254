"""
Deterministic category lookup by domain and by keywords.

Domain lookup runs three passes over DOMAIN_CATEGORY_MAP:
1. Exact hostname match
2. Prefix match on hostname+path ("google.com/maps") or subdomain of a key
3. Base domain (last two labels) match ("app.slack.com" → "slack.com")

Keyword lookup scores free text against each generic category's keywords
and is the fallback when no embedding function is available.
"""

from typing import Optional
from urllib.parse import urlparse

from tab_organizer.agents.models import Item
from tab_organizer.agents.taxonomy import DOMAIN_CATEGORY_MAP, GENERIC_CATEGORIES, OTHERS
from tab_organizer.config import get_logger

logger = get_logger(__name__)

# Keywords longer than this count double
LONG_KEYWORD_LENGTH = 5
MIN_KEYWORD_SCORE = 2

WEB_SCHEMES = ("http", "https")


def _matches_prefix(full_path: str, key: str) -> bool:
    """True if full_path starts with key and the match ends on a label or path boundary."""
    if not full_path.startswith(key):
        return False
    if len(full_path) == len(key):
        return True
    return full_path[len(key)] in "/?#"


def resolve_category(url: str) -> Optional[str]:
    """
    Look up the category of a URL in the domain table.

    Args:
        url: Tab URL

    Returns:
        Category label, or None when nothing matches or the URL is malformed
        or not an http(s) URL

    Examples:
        https://github.com/foo → Development
        https://www.google.com/maps/place/x → Travel
        https://app.slack.com/client → Communication
    """
    if not url:
        return None

    try:
        parsed = urlparse(url)
        hostname = parsed.hostname or ""
    except ValueError:
        logger.debug(f"Malformed URL, no category: {url[:100]}")
        return None

    if parsed.scheme not in WEB_SCHEMES or not hostname:
        return None

    if hostname.startswith("www."):
        hostname = hostname[4:]

    # Pass 1: exact hostname
    category = DOMAIN_CATEGORY_MAP.get(hostname)
    if category:
        return category

    # Pass 2: path prefixes and subdomains of known keys
    full_path = hostname + parsed.path
    for domain, category in DOMAIN_CATEGORY_MAP.items():
        if _matches_prefix(full_path, domain) or hostname.endswith("." + domain):
            return category

    # Pass 3: base domain for unexpected subdomains
    parts = hostname.split(".")
    if len(parts) > 2:
        base_domain = ".".join(parts[-2:])
        category = DOMAIN_CATEGORY_MAP.get(base_domain)
        if category:
            return category

    return None


def resolve_item_category(item: Item) -> Optional[str]:
    """Domain-table category of a tab."""
    return resolve_category(item.url)


def keyword_scores(text: str) -> dict[str, int]:
    """
    Score text against every generic category's keyword list.

    Each keyword found in the text adds 2 if it is longer than 5 characters,
    otherwise 1.
    """
    text = text.lower()
    scores = {}
    for category, config in GENERIC_CATEGORIES.items():
        if category == OTHERS or not config.keywords:
            continue
        scores[category] = sum(
            2 if len(keyword) > LONG_KEYWORD_LENGTH else 1
            for keyword in config.keywords
            if keyword in text
        )
    return scores


def keyword_match(text: str) -> Optional[str]:
    """
    Best keyword category for free text.

    Args:
        text: Free text (typically title and page content)

    Returns:
        The highest-scoring category if its score is at least 2, else None.
        Ties go to the category declared first.
    """
    best_match = None
    best_score = 0

    for category, score in keyword_scores(text).items():
        if score > best_score and score >= MIN_KEYWORD_SCORE:
            best_score = score
            best_match = category

    return best_match


def keyword_match_item(item: Item) -> Optional[str]:
    """Keyword category of a tab from its title and page content."""
    return keyword_match(f"{item.title} {item.content}")
