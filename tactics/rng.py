from typing import Protocol, Sequence, TypeVar
import numpy as np

T = TypeVar("T")

class RandomSource(Protocol):
    """Anything the simulator and risk model can draw randomness from."""

    def bernoulli(self, p: float) -> bool: ...

    def uniform(self, a: float, b: float) -> float: ...

    def integers(self, low: int, high: int) -> int: ...

    def choice(self, items: Sequence[T]) -> T: ...

class DRNG:
    """Deterministic Random Number Generator wrapper."""

    def __init__(self, seed: int):
        self.g = np.random.Generator(np.random.PCG64(seed))

    def bernoulli(self, p: float) -> bool:
        """Return True with probability p."""
        return bool(self.g.random() < p)

    def uniform(self, a: float, b: float) -> float:
        """Return a random float in [a, b)."""
        return float(self.g.uniform(a, b))

    def integers(self, low: int, high: int) -> int:
        """Return a random int in [low, high)."""
        return int(self.g.integers(low, high))

    def choice(self, items: Sequence[T]) -> T:
        """Pick one element uniformly."""
        if not items:
            raise ValueError("cannot choose from an empty sequence")
        return items[self.integers(0, len(items))]
