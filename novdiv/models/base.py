
from typing import Callable, Hashable, Optional, Protocol

class UserNoveltyModel(Protocol):
    def score(self, item: Hashable) -> float:
        """
        ユーザーにとってのアイテムの新規性スコアを返す
        """
        ...

class NoveltyModel(Protocol):
    def get_model(self, user: Hashable) -> Optional[UserNoveltyModel]:
        """
        ユーザー別の新規性モデルを返す。存在しない場合は None
        """
        ...

class ItemDistanceModel(Protocol):
    def dist(self, item: Hashable) -> Callable[[Hashable], Optional[float]]:
        """
        item からの距離関数を返す。距離が定義されないペアには None を返す
        """
        ...

class UserRelevanceModel(Protocol):
    def gain(self, item: Hashable) -> float:
        ...

class RelevanceModel(Protocol):
    def get_model(self, user: Hashable) -> UserRelevanceModel:
        ...

class RankingDiscountModel(Protocol):
    def disc(self, rank: int) -> float:
        """
        0始まりの順位 rank に対する割引係数を返す
        """
        ...
