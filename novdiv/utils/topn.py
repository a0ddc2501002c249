
import heapq
from typing import List, Tuple

class TopN:
    """
    Bounded top-N selector over (key, score) pairs.

    Keeps at most `capacity` entries in a min-heap ordered by (score, key).
    A new candidate replaces the lowest held entry only when its score is
    strictly greater. Callers that want earlier-ranked items to win ties
    should give them higher keys.
    """
    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        self.capacity = capacity
        self._heap: List[Tuple[float, int]] = []

    def __len__(self) -> int:
        return len(self._heap)

    def add(self, key: int, score: float) -> bool:
        """
        Offer one candidate. Returns True if it is held after the call.
        """
        if self.capacity == 0:
            return False

        if len(self._heap) < self.capacity:
            heapq.heappush(self._heap, (score, key))
            return True

        if score > self._heap[0][0]:
            heapq.heapreplace(self._heap, (score, key))
            return True

        return False

    def finalize(self) -> List[Tuple[int, float]]:
        """
        Held entries by descending score, ties by descending key.
        """
        ordered = sorted(self._heap, reverse=True)
        return [(key, score) for score, key in ordered]
