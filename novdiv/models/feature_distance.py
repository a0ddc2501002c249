
import math
from typing import Any, Callable, Dict, Hashable, Optional
from novdiv.data.features import FeatureData
from novdiv.models.base import ItemDistanceModel

class FeatureItemDistanceModel(ItemDistanceModel):
    """
    アイテム間距離を特徴量データから求める距離モデルの基底クラス。

    どちらかのアイテムが特徴量を持たない場合、距離は未定義(None)。
    """
    def __init__(self, feature_data: FeatureData):
        self.feature_data = feature_data

    def dist(self, item: Hashable) -> Callable[[Hashable], Optional[float]]:
        features = self._vector(item)

        def _dist(other: Hashable) -> Optional[float]:
            if not features:
                return None
            other_features = self._vector(other)
            if not other_features:
                return None
            return self.feature_distance(features, other_features)
        return _dist

    def _vector(self, item: Hashable) -> Dict[Hashable, float]:
        return {feature: self.weight(value) for feature, value in self.feature_data.item_features(item)}

    def weight(self, value: Any) -> float:
        # 値のない特徴量は 1.0
        if value is None:
            return 1.0
        return float(value)

    def feature_distance(self, a: Dict[Hashable, float], b: Dict[Hashable, float]) -> Optional[float]:
        raise NotImplementedError

class JaccardFeatureItemDistanceModel(FeatureItemDistanceModel):
    """
    1 - |A ∩ B| / |A ∪ B| over the feature sets; feature values are ignored.
    """
    def feature_distance(self, a: Dict[Hashable, float], b: Dict[Hashable, float]) -> Optional[float]:
        shared = len(a.keys() & b.keys())
        return 1.0 - shared / (len(a) + len(b) - shared)

class CosineFeatureItemDistanceModel(FeatureItemDistanceModel):
    """
    1 - cosine similarity of the feature vectors. Undefined for zero vectors.
    """
    def feature_distance(self, a: Dict[Hashable, float], b: Dict[Hashable, float]) -> Optional[float]:
        norm = math.sqrt(sum(v * v for v in a.values())) * math.sqrt(sum(v * v for v in b.values()))
        if norm == 0.0:
            return None
        dot = sum(v * b[f] for f, v in a.items() if f in b)
        return 1.0 - dot / norm
