
from typing import Any, Callable, Dict, Hashable, Mapping, Optional, Tuple, Union
from novdiv.models.base import NoveltyModel, UserNoveltyModel, ItemDistanceModel

NoveltyLookup = Union[Mapping[Hashable, float], Callable[[Hashable], float]]

class _UserNoveltyView(UserNoveltyModel):
    def __init__(self, lookup: NoveltyLookup, default: float):
        self.lookup = lookup
        self.default = default

    def score(self, item: Hashable) -> float:
        if callable(self.lookup):
            return float(self.lookup(item))
        return float(self.lookup.get(item, self.default))

class CallableNoveltyModel(NoveltyModel):
    """
    既存のユーザー別スコア取得ロジック(関数)をラップし、
    NoveltyModel インターフェースに適合させるアダプター。

    logic_func はユーザーを受け取り、item -> score の dict もしくは関数を返す。
    モデルが無いユーザーには None を返すこと。
    """
    def __init__(self, logic_func: Callable[[Hashable], Optional[NoveltyLookup]], default: float = 0.0):
        self.logic_func = logic_func
        self.default = default

    def get_model(self, user: Hashable) -> Optional[UserNoveltyModel]:
        lookup = self.logic_func(user)
        if lookup is None:
            return None
        return _UserNoveltyView(lookup, self.default)

class MappingDistanceModel(ItemDistanceModel):
    """
    Wraps a precomputed {(item_a, item_b): distance} mapping.

    Pairs missing from the mapping have an undefined distance (None). With
    `symmetric` the reverse pair is looked up as well.
    """
    def __init__(self, distances: Mapping[Tuple[Hashable, Hashable], float], symmetric: bool = True):
        self.distances: Dict[Tuple[Hashable, Hashable], Any] = dict(distances)
        self.symmetric = symmetric

    def dist(self, item: Hashable) -> Callable[[Hashable], Optional[float]]:
        def _dist(other: Hashable) -> Optional[float]:
            value = self.distances.get((item, other))
            if value is None and self.symmetric:
                value = self.distances.get((other, item))
            return value
        return _dist
