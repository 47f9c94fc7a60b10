import numpy as np

class DRNG:
    """Deterministic Random Number Generator wrapper."""

    def __init__(self, seed: int):
        self.g = np.random.Generator(np.random.PCG64(seed))

    def integer(self, low: int, high: int) -> int:
        """Return a random int in [low, high)."""
        return int(self.g.integers(low, high))

    def coords(self, count: int, extent: int) -> list[tuple[int, int]]:
        """Return count (x, y) pairs, each axis uniform in [0, extent)."""
        if count <= 0:
            return []
        xy = self.g.integers(0, extent, size=(count, 2))
        return [(int(x), int(y)) for x, y in xy]
