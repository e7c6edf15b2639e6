"""
Unit tests for the ranking comparator and display filter.
"""

import itertools

import pytest

from soloqbot.data_models.ranked import Division, Tier
from soloqbot.utils.ranking import RankingUtility


class TestCompareEntries:
    """Tier, then division, then league points."""

    def test_higher_tier_wins_regardless_of_division_and_points(self, make_entry):
        diamond = make_entry("low", tier=Tier.DIAMOND, division=Division.IV, points=0)
        gold = make_entry("high", tier=Tier.GOLD, division=Division.I, points=99)

        assert RankingUtility.compare_entries(diamond, gold) < 0
        assert RankingUtility.compare_entries(gold, diamond) > 0

    def test_equal_tier_higher_division_wins(self, make_entry):
        gold_one = make_entry("a", division=Division.I, points=0)
        gold_three = make_entry("b", division=Division.III, points=90)

        assert RankingUtility.compare_entries(gold_one, gold_three) < 0

    def test_equal_tier_and_division_more_points_wins(self, make_entry):
        more = make_entry("a", points=50)
        fewer = make_entry("b", points=30)

        assert RankingUtility.compare_entries(more, fewer) < 0
        assert RankingUtility.compare_entries(fewer, more) > 0

    def test_identical_standing_is_a_tie(self, make_entry):
        assert RankingUtility.compare_entries(make_entry("a", points=10), make_entry("b", points=10)) == 0

    def test_missing_tier_or_division_is_rejected(self, make_entry):
        ranked = make_entry("a")
        with pytest.raises(ValueError):
            RankingUtility.compare_entries(ranked, make_entry("b", tier=None))
        with pytest.raises(ValueError):
            RankingUtility.compare_entries(make_entry("c", division=None), ranked)

    def test_strict_weak_ordering(self, make_entry):
        """Antisymmetric and transitive over a mixed set of standings."""
        entries = [
            make_entry("a", tier=Tier.IRON, division=Division.IV, points=0),
            make_entry("b", tier=Tier.GOLD, division=Division.II, points=40),
            make_entry("c", tier=Tier.GOLD, division=Division.II, points=40),
            make_entry("d", tier=Tier.GOLD, division=Division.I, points=0),
            make_entry("e", tier=Tier.MASTER, division=Division.I, points=120),
            make_entry("f", tier=Tier.MASTER, division=Division.I, points=300),
            make_entry("g", tier=Tier.SILVER, division=Division.III, points=75),
        ]
        compare = RankingUtility.compare_entries

        for a, b in itertools.permutations(entries, 2):
            assert (compare(a, b) < 0) == (compare(b, a) > 0)
            assert (compare(a, b) == 0) == (compare(b, a) == 0)

        for a, b, c in itertools.permutations(entries, 3):
            if compare(a, b) < 0 and compare(b, c) < 0:
                assert compare(a, c) < 0
            if compare(a, b) == 0 and compare(b, c) == 0:
                assert compare(a, c) == 0


class TestSortEntries:

    def test_best_first(self, make_entry):
        entries = [
            make_entry("silver", tier=Tier.SILVER, division=Division.I, points=99),
            make_entry("challenger", tier=Tier.CHALLENGER, division=Division.I, points=900),
            make_entry("gold_low", tier=Tier.GOLD, division=Division.IV, points=10),
            make_entry("gold_high", tier=Tier.GOLD, division=Division.IV, points=80),
        ]

        names = [entry.identity_name for entry in RankingUtility.sort_entries(entries)]

        assert names == ["challenger", "gold_high", "gold_low", "silver"]

    def test_ties_keep_input_order(self, make_entry):
        entries = [make_entry(name, points=25) for name in ("first", "second", "third")]

        names = [entry.identity_name for entry in RankingUtility.sort_entries(entries)]

        assert names == ["first", "second", "third"]

    def test_empty_input(self):
        assert RankingUtility.sort_entries([]) == []


class TestDisplayFilter:

    def test_only_ranked_solo_queue_entries_are_kept(self, make_entry):
        keep = make_entry("ranked")
        entries = [
            keep,
            make_entry("unranked", tier=Tier.UNRANKED),
            make_entry("no_tier", tier=None),
            make_entry("no_division", division=None),
            make_entry("flex", queue_type="RANKED_FLEX_SR"),
        ]

        assert RankingUtility.filter_displayable(entries) == [keep]
