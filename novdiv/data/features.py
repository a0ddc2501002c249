
import io
import logging
from collections import defaultdict
from typing import Any, Callable, Collection, Dict, Hashable, Iterator, List, Optional, TextIO, Tuple, Union

logger = logging.getLogger(__name__)

class FeatureData:
    """
    アイテムと特徴量の対応を、アイテム側・特徴量側の両方から引けるように保持する。

    item_features(item) は (feature, value) のリスト、
    feature_items(feature) は (item, value) のリストを返す。
    """
    def __init__(
        self,
        by_item: Dict[Hashable, List[Tuple[Hashable, Any]]],
        by_feature: Dict[Hashable, List[Tuple[Hashable, Any]]],
    ):
        self._by_item = by_item
        self._by_feature = by_feature

    def item_features(self, item: Hashable) -> List[Tuple[Hashable, Any]]:
        return list(self._by_item.get(item, []))

    def feature_items(self, feature: Hashable) -> List[Tuple[Hashable, Any]]:
        return list(self._by_feature.get(feature, []))

    def num_features(self, item: Hashable) -> int:
        return len(self._by_item.get(item, []))

    def num_items(self, feature: Hashable) -> int:
        return len(self._by_feature.get(feature, []))

    def items_with_features(self) -> Iterator[Hashable]:
        return iter(self._by_item)

    def features_with_items(self) -> Iterator[Hashable]:
        return iter(self._by_feature)

    def num_items_with_features(self) -> int:
        return len(self._by_item)

    def num_features_with_items(self) -> int:
        return len(self._by_feature)

    @classmethod
    def load(
        cls,
        source: Union[str, TextIO],
        item_parser: Callable[[str], Hashable] = str,
        feature_parser: Callable[[str], Hashable] = str,
        value_parser: Optional[Callable[[Optional[str]], Any]] = None,
        items: Optional[Collection[Hashable]] = None,
        features: Optional[Collection[Hashable]] = None,
    ) -> "FeatureData":
        """
        Load item-feature pairs from a path or a text stream.

        Each line holds tab-separated `item`, `feature` and an optional value.
        Lines that cannot be parsed, or whose item/feature is not in the given
        `items`/`features` collections, are skipped.

        Args:
            source: file path or open text stream
            item_parser: converts the item field
            feature_parser: converts the feature field
            value_parser: converts the value field (called with None when absent);
                the raw field is kept when not given
            items: known items; other items are skipped
            features: known features; other features are skipped
        """
        if isinstance(source, str):
            with open(source, encoding="utf-8") as f:
                return cls.load(f, item_parser, feature_parser, value_parser, items, features)

        by_item: Dict[Hashable, List[Tuple[Hashable, Any]]] = defaultdict(list)
        by_feature: Dict[Hashable, List[Tuple[Hashable, Any]]] = defaultdict(list)
        skipped = 0

        for lineno, line in enumerate(source, start=1):
            tokens = line.rstrip("\r\n").split("\t", 2)
            if len(tokens) < 2:
                logger.debug("line %d: expected at least 2 fields, skipped", lineno)
                skipped += 1
                continue

            raw_value = tokens[2] if len(tokens) == 3 else None
            try:
                item = item_parser(tokens[0])
                feature = feature_parser(tokens[1])
                value = value_parser(raw_value) if value_parser is not None else raw_value
            except (TypeError, ValueError) as e:
                logger.debug("line %d: %s, skipped", lineno, e)
                skipped += 1
                continue

            if (items is not None and item not in items) or (features is not None and feature not in features):
                skipped += 1
                continue

            by_item[item].append((feature, value))
            by_feature[feature].append((item, value))

        if skipped:
            logger.info("feature data: %d lines skipped", skipped)

        return cls(dict(by_item), dict(by_feature))

    @classmethod
    def loads(cls, text: str, **kwargs) -> "FeatureData":
        return cls.load(io.StringIO(text), **kwargs)
