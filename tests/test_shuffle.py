"""Tests for the seeded shuffle and monthly rotation."""

from __future__ import annotations

import datetime as dt

from seosite.shuffle import featured, fnv1a_32, mix32, rotation_seed, seeded_shuffle, time_bucket


class TestHashing:
    """Test the seed hash and mixing function."""

    def test_fnv1a_reference_values(self) -> None:
        assert fnv1a_32("") == 0x811C9DC5
        assert fnv1a_32("a") == 0xE40C292C
        assert fnv1a_32("foobar") == 0xBF9CF968

    def test_fnv1a_is_order_sensitive(self) -> None:
        assert fnv1a_32("ab") != fnv1a_32("ba")

    def test_mix32_stays_in_32_bits(self) -> None:
        for value in (0, 1, 0xFFFFFFFF, 123456789, 2**40 + 7):
            assert 0 <= mix32(value) <= 0xFFFFFFFF
        assert mix32(0) == 0


class TestSeededShuffle:
    """Test seeded_shuffle function."""

    def test_same_seed_same_order(self) -> None:
        first = seeded_shuffle([1, 2, 3, 4, 5], "2024-05:amor")
        second = seeded_shuffle([1, 2, 3, 4, 5], "2024-05:amor")
        assert first == second

    def test_other_seed_is_deterministic_too(self) -> None:
        assert seeded_shuffle([1, 2, 3, 4, 5], "2024-06:amor") == seeded_shuffle([1, 2, 3, 4, 5], "2024-06:amor")

    def test_is_permutation(self) -> None:
        items = list(range(25))
        for seed in ("a", "b", "2024-01:home", ""):
            result = seeded_shuffle(items, seed)
            assert sorted(result) == items
            assert len(result) == len(items)

    def test_seeds_change_the_order(self) -> None:
        """Across a year of buckets the rotation does not stay frozen."""
        items = list(range(8))
        orders = {tuple(seeded_shuffle(items, f"2024-{month:02d}:amor")) for month in range(1, 13)}
        assert len(orders) > 1

    def test_input_not_mutated(self) -> None:
        items = ["a", "b", "c", "d"]
        seeded_shuffle(items, "seed")
        assert items == ["a", "b", "c", "d"]

    def test_small_inputs(self) -> None:
        assert seeded_shuffle([], "x") == []
        assert seeded_shuffle(["solo"], "x") == ["solo"]

    def test_accepts_tuples(self) -> None:
        assert sorted(seeded_shuffle(("x", "y", "z"), "k")) == ["x", "y", "z"]


class TestRotation:
    """Test time buckets and featured selection."""

    def test_time_bucket_is_year_month(self) -> None:
        assert time_bucket(dt.datetime(2024, 5, 31, 23, 59)) == "2024-05"
        assert time_bucket(dt.date(2025, 12, 1)) == "2025-12"

    def test_rotation_seed(self) -> None:
        assert rotation_seed("2024-05", "amor") == "2024-05:amor"

    def test_featured_stable_within_bucket(self) -> None:
        items = list(range(10))
        assert featured(items, "2024-05", "amor", 3) == featured(items, "2024-05", "amor", 3)
        assert featured(items, "2024-05", "amor", 3) == seeded_shuffle(items, "2024-05:amor")[:3]

    def test_featured_limits(self) -> None:
        assert featured([1, 2], "2024-05", "amor", 5) == seeded_shuffle([1, 2], "2024-05:amor")
        assert featured([1, 2, 3], "2024-05", "amor", 0) == []
