"""
Unit tests for the domain-first tab organizer.
"""

from unittest.mock import Mock

import pytest

from tab_organizer.agents.models import ClusterColor, Item
from tab_organizer.agents.tab_organizer import InMemoryGroupSink, TabOrganizer, GroupSink
from tab_organizer.exceptions import ClusteringInputError, InvalidParameterError


@pytest.fixture
def window_tabs():
    """Tabs of one window with cached embeddings, plus one without."""
    return [
        Item(id=1, title="acme/api", url="https://github.com/acme/api", embedding=[1.0, 0.0, 0.0, 0.0]),
        Item(id=2, title="acme/web", url="https://github.com/acme/web", embedding=[0.9, 0.1, 0.0, 0.0]),
        Item(id=3, title="Trailer", url="https://www.youtube.com/watch?v=1", embedding=[0.0, 0.0, 0.0, 1.0]),
        Item(id=4, title="Sourdough starter", url="https://recipes.example/a", embedding=[0.0, 1.0, 0.0, 0.0]),
        Item(id=5, title="Sourdough hydration", url="https://recipes.example/b", embedding=[0.0, 1.0, 0.05, 0.0]),
        Item(id=6, title="Sourdough shaping", url="https://recipes.example/c", embedding=[0.0, 1.0, -0.05, 0.0]),
        Item(id=7, title="Tax forms", url="https://zzz.example/tax", embedding=[0.0, 0.0, 1.0, 0.0]),
        Item(id=8, title="No vector", url="https://zzz.example/none"),
    ]


class FailingSink(GroupSink):
    """Sink that rejects one group title."""

    def __init__(self, reject: str):
        self.reject = reject
        self.created = []

    def create_group(self, item_ids, title, color, collapsed):
        if title == self.reject:
            raise RuntimeError("tab group API error")
        self.created.append(title)
        return len(self.created)


class TestPlan:
    """Tests for TabOrganizer.plan()."""

    def test_categories_then_semantic_then_ungrouped(self, window_tabs):
        result = TabOrganizer().plan(window_tabs)

        assert [(p.title, p.kind) for p in result.plans] == [
            ("Development", "category"),
            ("Entertainment", "category"),
            ("Recipes", "semantic"),
            ("Ungrouped", "ungrouped"),
        ]
        assert result.plans[0].item_ids == [1, 2]
        assert result.plans[1].item_ids == [3]
        assert result.plans[2].item_ids == [4, 5, 6]
        assert result.plans[3].item_ids == [8, 7]

    def test_counts(self, window_tabs):
        result = TabOrganizer().plan(window_tabs)

        assert result.category_groups == 2
        assert result.semantic_groups == 1
        assert result.noise_count == 2
        assert result.total_items == 8
        assert result.epsilon == pytest.approx(0.3)

    def test_colors(self, window_tabs):
        plans = TabOrganizer().plan(window_tabs).plans

        assert plans[0].color == ClusterColor.GREY
        assert plans[1].color == ClusterColor.RED
        assert plans[2].color not in (ClusterColor.GREY, ClusterColor.RED)
        assert plans[3].color == ClusterColor.GREY
        assert plans[3].collapsed is True
        assert not any(p.collapsed for p in plans[:3])

    def test_every_tab_planned_once(self, window_tabs):
        plans = TabOrganizer().plan(window_tabs).plans
        ids = [item_id for plan in plans for item_id in plan.item_ids]
        assert sorted(ids) == list(range(1, 9))

    def test_fewer_than_two_tabs(self):
        result = TabOrganizer().plan([Item(id=1, url="https://github.com", embedding=[1.0])])

        assert result.plans == []
        assert result.noise_count == 1

    def test_epsilon_estimated_and_capped_for_many_tabs(self):
        # Six mutually orthogonal tabs: every k-distance is 1.0
        items = []
        for i in range(6):
            vector = [0.0] * 6
            vector[i] = 1.0
            items.append(Item(id=i, title=f"Tab {i}", url=f"https://site{i}.example", embedding=vector))

        result = TabOrganizer(epsilon_ceiling=0.35).plan(items)

        assert result.epsilon == pytest.approx(0.35)
        assert result.semantic_groups == 0
        assert [p.title for p in result.plans] == ["Ungrouped"]
        assert result.noise_count == 6

    def test_embed_function_fills_missing_vectors(self):
        items = [
            Item(id=1, title="Sourdough starter", url="https://recipes.example/a"),
            Item(id=2, title="Sourdough hydration", url="https://recipes.example/b"),
            Item(id=3, title="Sourdough shaping", url="https://recipes.example/c"),
        ]
        embed = Mock(return_value=[[1.0, 0.0], [1.0, 0.01], [1.0, -0.01]])

        result = TabOrganizer(embed=embed).plan(items)

        embed.assert_called_once_with([
            "Sourdough starter https://recipes.example/a",
            "Sourdough hydration https://recipes.example/b",
            "Sourdough shaping https://recipes.example/c",
        ])
        assert [p.title for p in result.plans] == ["Recipes"]

    def test_embed_failure_leaves_tabs_ungrouped(self):
        items = [
            Item(id=1, title="a", url="https://github.com/a"),
            Item(id=2, title="b", url="https://github.com/b"),
        ]
        embed = Mock(side_effect=RuntimeError("offline"))

        result = TabOrganizer(embed=embed).plan(items)

        assert [p.title for p in result.plans] == ["Ungrouped"]
        assert result.plans[0].item_ids == [1, 2]

    def test_duplicate_ids_raise(self):
        items = [Item(id=1, title="a"), Item(id=1, title="b")]
        with pytest.raises(ClusteringInputError):
            TabOrganizer().plan(items)

    def test_invalid_parameters(self):
        with pytest.raises(InvalidParameterError):
            TabOrganizer(epsilon_ceiling=3.0)
        with pytest.raises(InvalidParameterError):
            TabOrganizer(min_points=0)


class TestOrganize:
    """Tests for TabOrganizer.organize() and sinks."""

    def test_groups_created_through_sink(self, window_tabs):
        sink = InMemoryGroupSink()
        result = TabOrganizer(sink=sink).organize(window_tabs)

        assert result.groups_created == 4
        assert [g.title for g in sink.groups] == ["Development", "Entertainment", "Recipes", "Ungrouped"]
        assert sink.groups[3].collapsed is True

    def test_sink_failure_does_not_stop_other_groups(self, window_tabs):
        sink = FailingSink(reject="Entertainment")
        result = TabOrganizer(sink=sink).organize(window_tabs)

        assert result.groups_created == 3
        assert sink.created == ["Development", "Recipes", "Ungrouped"]

    def test_nothing_to_organize(self):
        sink = InMemoryGroupSink()
        result = TabOrganizer(sink=sink).organize([])

        assert result.groups_created == 0
        assert sink.groups == []
