"""Per-key request sequencing to discard superseded responses."""


class ResponseSequencer:
    """
    Issues increasing tickets per key.

    A response may only be applied while its ticket is still the latest one
    issued for that key; anything older was superseded (e.g. a second
    refresh) and must be dropped rather than overwrite newer data.
    """

    def __init__(self) -> None:
        self._latest: dict[str, int] = {}

    def issue(self, key: str) -> int:
        ticket = self._latest.get(key, 0) + 1
        self._latest[key] = ticket
        return ticket

    def is_current(self, key: str, ticket: int) -> bool:
        return self._latest.get(key) == ticket

    def latest(self, key: str) -> int:
        return self._latest.get(key, 0)
