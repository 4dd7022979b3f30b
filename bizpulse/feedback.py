"""
Local feedback log: short votes + comments saved to a JSON file.
"""
import json
import logging
import uuid
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from bizpulse.config import config

logger = logging.getLogger(__name__)


VOTES = ["Helpful", "Needs improvement", "Would pay"]


class FeedbackError(Exception):
    """Raised when a feedback entry is rejected."""
    pass


@dataclass(frozen=True)
class FeedbackItem:
    id: str
    vote: str
    comment: str
    created_at: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


class FeedbackLog:
    """Newest-first list of feedback items, capped at `limit` entries."""

    def __init__(self, path: Optional[Path] = None, limit: Optional[int] = None):
        self.path = Path(path) if path is not None else config.feedback_store_path
        self.limit = limit if limit is not None else config.feedback_limit

    def items(self) -> List[FeedbackItem]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable feedback log %s: %s", self.path, e)
            return []
        if not isinstance(raw, list):
            return []

        items = []
        for entry in raw:
            try:
                items.append(FeedbackItem(
                    id=str(entry["id"]),
                    vote=str(entry["vote"]),
                    comment=str(entry["comment"]),
                    created_at=str(entry["created_at"]),
                ))
            except (KeyError, TypeError):
                continue
        return items

    def _write(self, items: List[FeedbackItem]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps([item.to_dict() for item in items], indent=2),
            encoding="utf-8",
        )

    def add(self, vote: str, comment: str,
            created_at: Optional[datetime] = None) -> FeedbackItem:
        """Validate and prepend a new entry, dropping the oldest past the limit."""
        if vote not in VOTES:
            raise FeedbackError(f"Invalid vote: {vote}. Must be one of: {', '.join(VOTES)}")
        trimmed = (comment or "").strip()
        if not trimmed:
            raise FeedbackError("Please add a short comment (1-2 sentences).")

        if created_at is None:
            created_at = datetime.now(timezone.utc)

        item = FeedbackItem(
            id=uuid.uuid4().hex,
            vote=vote,
            comment=trimmed,
            created_at=created_at.isoformat(),
        )
        updated = [item] + self.items()
        self._write(updated[:self.limit])
        logger.info("Recorded feedback vote %r", vote)
        return item

    def stats(self) -> Dict[str, int]:
        """Total responses plus a count per vote."""
        items = self.items()
        counts = {"total": len(items)}
        for vote in VOTES:
            counts[vote] = sum(1 for item in items if item.vote == vote)
        return counts

    def clear(self):
        if self.path.exists():
            self.path.unlink()
