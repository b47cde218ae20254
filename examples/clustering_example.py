"""
Example demonstrating hybrid tab categorization and window organization.

This example shows:
1. Building tab records from raw title/URL/snippet fields
2. Keyword-only categorization (no API key needed)
3. Embedding-backed categorization with semantic matching and DBSCAN
4. Domain-first organization into tab group plans
"""

from tab_organizer.agents import (
    InMemoryGroupSink,
    OpenAIEmbeddingProvider,
    SmartCategorizer,
    TabOrganizer,
    build_item,
)
from tab_organizer.config import get_settings, setup_logging


TABS = [
    (1, "Pull requests · acme/api", "https://github.com/acme/api/pulls", ""),
    (2, "python - How to sort a dict by value", "https://stackoverflow.com/questions/613183", ""),
    (3, "Sourdough starter feeding schedule", "https://thebreadkitchen.example/sourdough", "starter flour water ratio"),
    (4, "Sourdough hydration explained", "https://bakingblog.example/hydration", "flour water hydration crumb"),
    (5, "Inbox (3) - Gmail", "https://mail.google.com/mail/u/0/#inbox", ""),
    (6, "Flights to Lisbon", "https://www.google.com/travel/flights", ""),
    (7, "Quarterly budget review", "https://unknown-intranet.example/budget", "budget expense invoice payment"),
]


def print_result(result):
    for group in result.groups:
        print(f"[{group.color.value:>6}] {group.name} ({group.source}, {group.size} tabs)")
        for item in group.items:
            print(f"           - {item.title}")
    print(f"Others: {[item.title for item in result.others]}")
    print()


def main():
    """Run tab categorization example."""

    settings = get_settings()
    setup_logging("WARNING")

    items = [build_item(id, title, url, content) for id, title, url, content in TABS]

    print("=" * 80)
    print("Tab Categorization Example")
    print("=" * 80)
    print()

    # =========================================================================
    # Keyword fallback: domain table, then keyword scores
    # =========================================================================
    print("-" * 80)
    print("Domain lookup + keyword fallback (no embeddings)")
    print("-" * 80)
    print_result(SmartCategorizer().categorize(items))

    if not settings.openai_api_key:
        print("OPENAI_API_KEY not set in .env file, skipping embedding-backed examples")
        return

    provider = OpenAIEmbeddingProvider()

    # =========================================================================
    # Hybrid: domain lookup, semantic match, DBSCAN over the rest
    # =========================================================================
    print("-" * 80)
    print("Hybrid categorization (embeddings)")
    print("-" * 80)
    categorizer = SmartCategorizer(
        embed=provider,
        similarity_threshold=settings.similarity_threshold,
        min_cluster_size=settings.min_cluster_size,
    )
    print_result(categorizer.categorize(items))

    # =========================================================================
    # Domain-first organize flow
    # =========================================================================
    print("-" * 80)
    print("Organizing window into tab groups")
    print("-" * 80)
    sink = InMemoryGroupSink()
    organizer = TabOrganizer(embed=provider, sink=sink, epsilon_ceiling=settings.epsilon_ceiling)
    result = organizer.organize(items)

    for plan in sink.groups:
        state = "collapsed" if plan.collapsed else "expanded"
        print(f"[{plan.color.value:>6}] {plan.title}: {plan.item_ids} ({state})")
    print()
    print(f"✓ {result.groups_created} groups created, {result.noise_count} tabs ungrouped")


if __name__ == "__main__":
    main()
