"""Small helpers shared by the test modules."""


class FakeClock:
    """Manually advanced clock for staleness and rate-limit tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def auth(user_id: str) -> dict:
    return {"X-User-Id": user_id}
