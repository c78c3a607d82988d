"""Unit tests for SkipTracker age limit and lowest-block tracking."""

from __future__ import annotations

from spot_swap_sync.services.spot_provider.skip_tracker import MAX_SKIP_AGE_BLOCKS, SkipTracker


def test_skip_at_age_limit_is_tracked() -> None:
    tracker = SkipTracker("base", current_block=10_000)

    assert tracker.record("0xa", 10_000 - 1799, "receipt_not_found") is True
    assert tracker.record("0xb", 10_000 - MAX_SKIP_AGE_BLOCKS, "receipt_not_found") is True
    assert tracker.lowest_skipped_block == 10_000 - MAX_SKIP_AGE_BLOCKS


def test_skip_older_than_limit_is_dropped() -> None:
    tracker = SkipTracker("base", current_block=10_000)

    assert tracker.record("0xa", 10_000 - 1801, "receipt_fetch_failed") is False
    assert tracker.lowest_skipped_block is None
    assert tracker.skipped == {}


def test_lowest_block_wins() -> None:
    tracker = SkipTracker("eth", current_block=500, max_age_blocks=100)

    tracker.record("0xa", 480, "receipt_not_found")
    tracker.record("0xb", 450, "receipt_not_found")
    tracker.record("0xc", 470, "receipt_not_found")

    assert tracker.lowest_skipped_block == 450
    assert tracker.skipped == {"0xa": 480, "0xb": 450, "0xc": 470}
