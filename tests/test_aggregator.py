"""Tests for concurrent harvesting and first-occurrence deduplication."""

import threading

from jobalert.aggregation import aggregate, harvest
from jobalert.domain.models import Posting
from tests.helpers.channels import identities
from tests.helpers.static_adapter import StaticAdapter


def posting(identity: str, source: str = "Test") -> Posting:
    return Posting(title=f"React {identity}", company="Acme", source=source, identity=identity)


class TestAggregate:
    def test_first_occurrence_wins(self):
        b_first = posting("B", source="first")
        b_second = posting("B", source="second")
        result = aggregate([[posting("A"), b_first], [b_second, posting("C")]])

        assert identities(result) == ["A", "B", "C"]
        assert result[1].source == "first"

    def test_duplicates_within_one_batch(self):
        assert identities(aggregate([[posting("A"), posting("A"), posting("B")]])) == ["A", "B"]

    def test_no_sorting(self):
        assert identities(aggregate([[posting("Z")], [posting("A")]])) == ["Z", "A"]

    def test_empty(self):
        assert aggregate([]) == []
        assert aggregate([[], []]) == []


class TestHarvest:
    def test_declaration_order(self, criteria):
        release = threading.Event()
        slow = StaticAdapter("slow", [posting("A")], release=release)
        fast = StaticAdapter("fast", [posting("B")])
        # The fast adapter finishes first, releasing the slow one afterwards
        threading.Timer(0.05, release.set).start()

        batches = harvest([slow, fast], criteria, timeout=5)

        assert [identities(b) for b in batches] == [["A"], ["B"]]

    def test_raising_adapter_contributes_empty(self, criteria):
        broken = StaticAdapter("broken", raise_error=RuntimeError("boom"))
        ok = StaticAdapter("ok", [posting("A")])

        batches = harvest([broken, ok], criteria)

        assert batches[0] == []
        assert identities(batches[1]) == ["A"]

    def test_late_adapter_treated_as_empty(self, criteria):
        release = threading.Event()
        hung = StaticAdapter("hung", [posting("X")], release=release)
        ok = StaticAdapter("ok", [posting("A")])
        try:
            batches = harvest([hung, ok], criteria, timeout=0.2, max_workers=2)
        finally:
            release.set()

        assert batches[0] == []
        assert identities(batches[1]) == ["A"]

    def test_every_adapter_called_once(self, criteria):
        adapters = [StaticAdapter(f"s{i}", [posting(str(i))]) for i in range(5)]
        harvest(adapters, criteria, max_workers=2)
        assert [a.calls for a in adapters] == [1] * 5

    def test_no_adapters(self, criteria):
        assert harvest([], criteria) == []
