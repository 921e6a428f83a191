from __future__ import annotations


class RequestGeneration:
    """
    Monotonic request counter for one class of fetches.

    issue() hands out a token; a result is applied only while its token is
    still the latest one issued.
    """

    def __init__(self) -> None:
        self._latest = 0

    @property
    def latest(self) -> int:
        return self._latest

    def issue(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest

    def invalidate(self) -> None:
        """Make every outstanding token stale."""
        self._latest += 1
