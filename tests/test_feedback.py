"""
Tests for the local feedback log.
"""
import pytest
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from bizpulse.feedback import FeedbackError, FeedbackLog


@pytest.fixture
def log(tmp_path):
    return FeedbackLog(tmp_path / "feedback.json", limit=3)


class TestAdd:
    """Tests for recording feedback."""

    def test_add_and_read_back(self, log):
        item = log.add("Helpful", "  Saved me an hour.  ")

        items = log.items()
        assert items == [item]
        assert item.comment == "Saved me an hour."
        assert item.vote == "Helpful"

    def test_newest_first(self, log):
        t0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
        log.add("Helpful", "first", created_at=t0)
        log.add("Would pay", "second", created_at=t0 + timedelta(minutes=1))

        assert [i.comment for i in log.items()] == ["second", "first"]

    def test_keeps_only_limit(self, log):
        for i in range(5):
            log.add("Helpful", f"comment {i}")

        assert [i.comment for i in log.items()] == ["comment 4", "comment 3", "comment 2"]

    def test_blank_comment_rejected(self, log):
        with pytest.raises(FeedbackError, match="short comment"):
            log.add("Helpful", "   ")
        assert log.items() == []

    def test_unknown_vote_rejected(self, log):
        with pytest.raises(FeedbackError):
            log.add("Love it", "great")


class TestStats:

    def test_counts_per_vote(self, log):
        log.add("Helpful", "a")
        log.add("Helpful", "b")
        log.add("Needs improvement", "c")

        assert log.stats() == {
            "total": 3,
            "Helpful": 2,
            "Needs improvement": 1,
            "Would pay": 0,
        }

    def test_empty(self, log):
        assert log.stats()["total"] == 0


class TestStorage:

    def test_clear(self, log):
        log.add("Helpful", "a")

        log.clear()

        assert log.items() == []

    def test_corrupt_file_reads_empty(self, tmp_path):
        path = tmp_path / "feedback.json"
        path.write_text("[{broken", encoding="utf-8")

        assert FeedbackLog(path).items() == []

    def test_malformed_entries_skipped(self, tmp_path):
        path = tmp_path / "feedback.json"
        path.write_text(
            '[{"id": "1", "vote": "Helpful", "comment": "ok", "created_at": "2024-01-01"}, {"id": "2"}]',
            encoding="utf-8",
        )

        items = FeedbackLog(path).items()

        assert len(items) == 1
        assert items[0].comment == "ok"
