"""
Naming and coloring of finished tab groups.
"""

import math
import random
import re
import time
from collections import Counter
from collections.abc import Callable, Sequence
from typing import Optional

from tab_organizer.agents.models import ClusterColor, Item
from tab_organizer.agents.text_features import base_domain_name
from tab_organizer.config import get_logger

logger = get_logger(__name__)

# Share of members a domain must cover to name the group
DOMAIN_MAJORITY = 0.5
MIN_NAME_LENGTH = 3

# Words that say nothing about what a group of tabs is about
TITLE_STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "from", "as", "is", "was", "are", "been", "be", "www", "com",
    "net", "org", "http", "https", "html", "htm",
    # Browser and search terms
    "google", "search", "chrome", "browser", "tab", "new", "page", "home",
    "web", "site", "online", "free", "best", "top", "how", "what", "why",
    "brave", "firefox", "safari", "edge", "extensions",
})

_WORD_PATTERN = re.compile(r"\b[a-z0-9]+\b")


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def _usable(word: str) -> bool:
    return len(word) >= MIN_NAME_LENGTH and word.lower() not in TITLE_STOP_WORDS


def _shared_category(items: Sequence[Item]) -> Optional[str]:
    categories = {item.category for item in items if item.category}
    if len(categories) == 1 and all(item.category for item in items):
        return categories.pop()
    return None


def _majority_domain(items: Sequence[Item]) -> Optional[str]:
    counts: Counter[str] = Counter()
    for item in items:
        domain = item.effective_domain
        if not domain:
            continue
        name = base_domain_name(domain)
        if _usable(name):
            counts[name] += 1

    if not counts:
        return None

    name, count = counts.most_common(1)[0]
    if count >= math.ceil(len(items) * DOMAIN_MAJORITY):
        return name
    return None


def _member_keywords(item: Item) -> list[str]:
    """Distinct usable keywords of one tab, in order of appearance."""
    if item.keywords:
        words = [k.lower() for k in item.keywords]
    else:
        words = _WORD_PATTERN.findall(item.title.lower())
    return list(dict.fromkeys(w for w in words if _usable(w)))


def _top_keyword(items: Sequence[Item]) -> Optional[str]:
    """
    Keyword with the best spread-times-specificity score.

    Score = number of members containing the keyword * sqrt(keyword length).
    Ties go to the keyword seen first.
    """
    spread: dict[str, int] = {}
    for item in items:
        for word in _member_keywords(item):
            spread[word] = spread.get(word, 0) + 1

    best_word = None
    best_score = 0.0
    for word, members in spread.items():
        score = members * math.sqrt(len(word))
        if score > best_score:
            best_score = score
            best_word = word
    return best_word


def generate_group_name(
    items: Sequence[Item],
    clock: Callable[[], float] = time.time,
) -> str:
    """
    Derive a human-readable name for a group of tabs.

    Tries, in order:
    1. The category shared by every member
    2. The base domain name covering at least half of the members
    3. The best keyword by (members containing it) * sqrt(length)
    4. "Group <n>" with n derived from the current time

    Args:
        items: Tabs in the group
        clock: Time source in seconds, used for the placeholder name

    Returns:
        Group name
    """
    if items:
        category = _shared_category(items)
        if category:
            return category

        domain = _majority_domain(items)
        if domain:
            return _capitalize(domain)

        keyword = _top_keyword(items)
        if keyword:
            return _capitalize(keyword)

    name = f"Group {int(clock() * 1000) % 1000}"
    logger.debug(f"No naming signal for {len(items)} tabs, using placeholder '{name}'")
    return name


class ColorAllocator:
    """
    Hands out tab group colors for one run.

    Prefers colors not used yet in the run; once the palette is exhausted any
    color may be reused, chosen uniformly at random.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Initialize the allocator.

        Args:
            rng: Random source (pass a seeded instance for reproducible colors)
        """
        self.rng = rng or random.Random()
        self.palette: list[ClusterColor] = list(ClusterColor)
        self.used: set[ClusterColor] = set()

    def mark_used(self, color: ClusterColor) -> None:
        self.used.add(color)

    def next_color(self, preferred: Optional[ClusterColor] = None) -> ClusterColor:
        """Return the preferred color if given, else a random unused (or any) palette color."""
        if preferred is not None:
            color = preferred
        else:
            available = [c for c in self.palette if c not in self.used]
            color = self.rng.choice(available or self.palette)
        self.mark_used(color)
        return color
