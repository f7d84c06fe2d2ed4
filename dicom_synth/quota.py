"""Global image quota shared across generate calls."""

from __future__ import annotations


class ImageQuota:
    """Counts down the images a generator may still emit.

    A quota of None is unbounded. One quota may be handed to several
    generators used one after another so they share a single budget; it
    is not safe for concurrent use.
    """

    def __init__(self, limit: int | None = None):
        if limit is not None and limit < 0:
            raise ValueError(f"Image quota must be >= 0, got {limit}")
        self.limit = limit
        self.remaining = limit
        self.consumed = 0

    @property
    def exhausted(self) -> bool:
        return self.remaining is not None and self.remaining <= 0

    def try_consume(self) -> bool:
        """Take one image from the quota.

        Returns:
            True if the image may be emitted, False once the quota is spent

        """
        if self.exhausted:
            return False
        if self.remaining is not None:
            self.remaining -= 1
        self.consumed += 1
        return True

    def __repr__(self) -> str:
        return f"ImageQuota(limit={self.limit}, remaining={self.remaining})"
