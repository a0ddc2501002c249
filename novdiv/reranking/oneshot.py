
import logging
from typing import Dict, List
from novdiv.context import Recommendation, base_permutation
from novdiv.models.base import NoveltyModel
from novdiv.reranking.base import PermutationReranker, check_lambda, effective_length
from novdiv.utils.stats import Stats, normalize
from novdiv.utils.topn import TopN

logger = logging.getLogger(__name__)

class ItemNoveltyReranker(PermutationReranker):
    """
    One-shot reranker for history-independent novelty.

    Every candidate is scored once with the user's novelty model, relevance
    and novelty are z-scored over the whole candidate list and combined as
    (1 - lambda) * relevance + lambda * novelty. The best `max_length` items
    are kept with a TopN selector; ties keep the original order.
    """
    def __init__(self, novelty: NoveltyModel, lambda_: float = 0.5, normalize: bool = True):
        self.novelty = novelty
        self.lambda_ = check_lambda(lambda_)
        self.normalize = normalize

    def rerank_permutation(self, recommendation: Recommendation, max_length: int) -> List[int]:
        user_model = self.novelty.get_model(recommendation.user_id)
        if user_model is None:
            logger.debug("no novelty model for user %s", recommendation.user_id)
            return []

        n = effective_length(recommendation, max_length)

        if self.lambda_ == 0.0:
            return base_permutation(n)

        items = recommendation.items
        nov_map: Dict[int, float] = {}
        rel_stats = Stats()
        nov_stats = Stats()
        for i, item in enumerate(items):
            nov = user_model.score(item.id)
            nov_map[i] = nov
            rel_stats.accept(item.score)
            nov_stats.accept(nov)

        # key = M - i: 同点なら元の順位が高い(iが小さい)方が残る
        m = len(items)
        top_n = TopN(n)
        for i, item in enumerate(items):
            value = (
                (1 - self.lambda_) * normalize(item.score, rel_stats, self.normalize)
                + self.lambda_ * normalize(nov_map[i], nov_stats, self.normalize)
            )
            top_n.add(m - i, value)

        return [m - key for key, _ in top_n.finalize()]
