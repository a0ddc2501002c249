
import math
from typing import Optional
from novdiv.context import Recommendation
from novdiv.models.base import ItemDistanceModel, RankingDiscountModel, RelevanceModel

class EILD:
    """
    Expected Intra-List Diversity.

    For every position i in the top `cutoff`, the distances to the other
    items j of the list are averaged with weights
    gap_discount(max(0, j - i - 1)) * gain(j). The per-position averages are
    then combined with weights rank_discount(i) * gain(i) and normalized by
    the sum of rank_discount(i). Pairs with an undefined distance (None or
    NaN) are left out of both the average and its normalizer.

    Args:
        cutoff: maximum number of top items evaluated
        distance_model: item-to-item distance lookup
        relevance_model: per-user gain lookup
        rank_discount: discount over absolute positions
        gap_discount: discount over the gap between two positions; defaults to rank_discount
    """
    def __init__(
        self,
        cutoff: int,
        distance_model: ItemDistanceModel,
        relevance_model: RelevanceModel,
        rank_discount: RankingDiscountModel,
        gap_discount: Optional[RankingDiscountModel] = None,
    ):
        self.cutoff = cutoff
        self.distance_model = distance_model
        self.relevance_model = relevance_model
        self.rank_discount = rank_discount
        self.gap_discount = gap_discount if gap_discount is not None else rank_discount

    def evaluate(self, recommendation: Recommendation) -> float:
        user_rel = self.relevance_model.get_model(recommendation.user_id)

        items = recommendation.items
        n = max(0, min(self.cutoff, len(items)))

        eild = 0.0
        norm = 0.0
        for i in range(n):
            inner = 0.0
            inner_norm = 0.0
            dist = self.distance_model.dist(items[i].id)
            for j in range(n):
                if i == j:
                    continue
                d = dist(items[j].id)
                if d is None or math.isnan(d):
                    continue
                w = self.gap_discount.disc(max(0, j - i - 1)) * user_rel.gain(items[j].id)
                inner += w * d
                inner_norm += w

            if inner_norm > 0:
                eild += self.rank_discount.disc(i) * user_rel.gain(items[i].id) * inner / inner_norm
            norm += self.rank_discount.disc(i)

        if norm > 0:
            eild /= norm

        return eild
