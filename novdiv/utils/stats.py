
import math

class Stats:
    """
    Single-pass mean / standard deviation accumulator (Welford).
    """
    def __init__(self):
        self.count = 0
        self._mean = 0.0
        self._m2 = 0.0

    def accept(self, value: float) -> None:
        self.count += 1
        delta = value - self._mean
        self._mean += delta / self.count
        self._m2 += delta * (value - self._mean)

    def mean(self) -> float:
        return self._mean

    def variance(self) -> float:
        # 標本分散 (n - 1)。観測値が2件未満なら 0.0
        if self.count < 2:
            return 0.0
        return self._m2 / (self.count - 1)

    def standard_deviation(self) -> float:
        return math.sqrt(self.variance())

def normalize(value: float, stats: Stats, enabled: bool) -> float:
    """
    z-score normalization shared by the rerankers.

    Returns `value` untouched when disabled. When every observed value is
    identical the standard deviation is zero and the normalized value is 0.0.
    """
    if not enabled:
        return value

    sd = stats.standard_deviation()
    if sd == 0.0:
        return 0.0

    return (value - stats.mean()) / sd
