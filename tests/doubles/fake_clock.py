"""Controllable monotonic clock."""


class FakeClock:
    """Callable clock returning seconds, advanced by hand.

    Example:
        >>> clock = FakeClock()
        >>> clock.advance(301)
        >>> clock()
        301.0
    """

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
