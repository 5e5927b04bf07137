"""Tests for boundary building."""

import pytest

from total_order_sort.partition.boundaries import build_boundaries


class TestBuildBoundaries:
    """Test cases for build_boundaries."""

    def test_quartiles(self) -> None:
        assert build_boundaries(list(range(100)), 4) == (25, 50, 75)

    def test_rank_is_floor_of_i_s_over_r(self) -> None:
        """Test boundary i equals the sample at rank floor(i * S / R)."""
        samples = [x * 10 for x in range(10)]
        for num_partitions in range(1, 13):
            boundaries = build_boundaries(samples, num_partitions)
            assert len(boundaries) == num_partitions - 1
            for i, boundary in enumerate(boundaries, start=1):
                assert boundary == samples[i * len(samples) // num_partitions]

    def test_single_partition_has_no_boundaries(self) -> None:
        assert build_boundaries([1, 2, 3], 1) == ()

    def test_duplicates_allowed(self) -> None:
        """Test that a low-cardinality sample yields repeated boundaries."""
        assert build_boundaries([5, 5, 5], 4) == (5, 5, 5)

    def test_sample_smaller_than_partitions(self) -> None:
        assert build_boundaries([1, 2], 4) == (1, 2, 2)

    def test_boundaries_non_decreasing(self) -> None:
        boundaries = build_boundaries(sorted([7, -3, 7, 100, 42, 0, 0, 9]), 5)
        assert list(boundaries) == sorted(boundaries)

    def test_empty_sample(self) -> None:
        assert build_boundaries([], 4) == ()

    def test_idempotent(self) -> None:
        samples = list(range(0, 300, 3))
        assert build_boundaries(samples, 7) == build_boundaries(samples, 7)

    def test_rejects_zero_partitions(self) -> None:
        with pytest.raises(ValueError):
            build_boundaries([1], 0)
