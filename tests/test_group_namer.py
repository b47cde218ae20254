"""
Unit tests for group naming and color allocation.
"""

import random

from tab_organizer.agents.group_namer import ColorAllocator, generate_group_name
from tab_organizer.agents.models import ClusterColor, Item


class TestGenerateGroupName:
    """Tests for generate_group_name()."""

    def test_shared_category(self):
        items = [
            Item(id=1, title="Flights", url="https://a.example", category="Travel"),
            Item(id=2, title="Hotels", url="https://b.example", category="Travel"),
        ]
        assert generate_group_name(items) == "Travel"

    def test_mixed_categories_fall_through_to_domain(self):
        items = [
            Item(id=1, title="Issue", url="https://github.com/a", category="Development"),
            Item(id=2, title="Repo", url="https://github.com/b", category=None),
        ]
        assert generate_group_name(items) == "Github"

    def test_majority_domain(self):
        items = [
            Item(id=1, title="One", url="https://github.com/a"),
            Item(id=2, title="Two", url="https://gist.github.com/b"),
            Item(id=3, title="Three", url="https://gitlab.com/c"),
        ]
        assert generate_group_name(items) == "Github"

    def test_stop_listed_domain_is_skipped(self):
        items = [
            Item(id=1, title="Kubernetes pods", url="https://www.google.com/search?q=pods"),
            Item(id=2, title="Kubernetes services", url="https://www.google.com/search?q=svc"),
        ]
        assert generate_group_name(items) == "Kubernetes"

    def test_keyword_when_no_domain_majority(self):
        items = [
            Item(id=1, title="Kubernetes pods", url="https://alpha.example/a"),
            Item(id=2, title="Kubernetes services", url="https://beta.example/b"),
            Item(id=3, title="Helm charts for kubernetes", url="https://gamma.example/c"),
        ]
        assert generate_group_name(items) == "Kubernetes"

    def test_keyword_score_prefers_longer_words_at_equal_spread(self):
        items = [
            Item(id=1, title="x", url="https://alpha.example", keywords=["api", "authentication"]),
            Item(id=2, title="x", url="https://beta.example", keywords=["api", "authentication"]),
            Item(id=3, title="x", url="https://gamma.example", keywords=["api"]),
        ]
        # api: 3 * sqrt(3) ≈ 5.2, authentication: 2 * sqrt(14) ≈ 7.5
        assert generate_group_name(items) == "Authentication"

    def test_placeholder_name(self):
        assert generate_group_name([], clock=lambda: 1700000000.5) == "Group 500"

    def test_placeholder_when_nothing_usable(self):
        items = [Item(id=1, title="a b"), Item(id=2, title="the of")]
        assert generate_group_name(items, clock=lambda: 12.0) == "Group 0"


class TestColorAllocator:
    """Tests for ColorAllocator."""

    def test_preferred_color_is_used(self):
        allocator = ColorAllocator(random.Random(1))
        assert allocator.next_color(ClusterColor.RED) == ClusterColor.RED
        assert ClusterColor.RED in allocator.used

    def test_unused_colors_first(self):
        allocator = ColorAllocator(random.Random(1))
        colors = [allocator.next_color() for _ in range(len(ClusterColor))]
        assert set(colors) == set(ClusterColor)

    def test_reuses_after_exhaustion(self):
        allocator = ColorAllocator(random.Random(1))
        for _ in range(len(ClusterColor)):
            allocator.next_color()
        assert allocator.next_color() in set(ClusterColor)

    def test_marked_colors_are_avoided(self):
        allocator = ColorAllocator(random.Random(3))
        for color in ClusterColor:
            if color != ClusterColor.CYAN:
                allocator.mark_used(color)
        assert allocator.next_color() == ClusterColor.CYAN

    def test_seeded_allocators_agree(self):
        first = ColorAllocator(random.Random(5))
        second = ColorAllocator(random.Random(5))
        assert [first.next_color() for _ in range(4)] == [second.next_color() for _ in range(4)]
