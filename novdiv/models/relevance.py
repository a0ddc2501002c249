
from typing import Dict, Hashable, Mapping
from novdiv.models.base import RelevanceModel, UserRelevanceModel

class _ConstantGain(UserRelevanceModel):
    def gain(self, item: Hashable) -> float:
        return 1.0

class NoRelevanceModel(RelevanceModel):
    """
    Every item is equally relevant (gain 1.0) for every user.
    """
    def get_model(self, user: Hashable) -> UserRelevanceModel:
        return _ConstantGain()

class _BinaryGain(UserRelevanceModel):
    def __init__(self, relevant: frozenset):
        self.relevant = relevant

    def gain(self, item: Hashable) -> float:
        return 1.0 if item in self.relevant else 0.0

class BinaryRelevanceModel(RelevanceModel):
    """
    Binary relevance from per-user test scores: gain 1.0 when the user's test
    score for the item is at least `threshold`, otherwise 0.0.
    """
    def __init__(self, test_data: Mapping[Hashable, Mapping[Hashable, float]], threshold: float = 1.0):
        self.threshold = threshold
        self._relevant: Dict[Hashable, frozenset] = {
            user: frozenset(item for item, value in scores.items() if value >= threshold)
            for user, scores in test_data.items()
        }

    def get_model(self, user: Hashable) -> UserRelevanceModel:
        return _BinaryGain(self._relevant.get(user, frozenset()))
