
import concurrent.futures
import logging
import uuid
from typing import Iterable, List, Optional
from novdiv.config import ConfigManager
from novdiv.context import Recommendation, apply_permutation
from novdiv.metrics.eild import EILD
from novdiv.models.base import NoveltyModel
from novdiv.observability.logging import log_metric_result, log_rerank_result
from novdiv.reranking.api import get_reranker
from novdiv.reranking.base import PermutationReranker
from novdiv.reranking.greedy import UserSecondaryScore

logger = logging.getLogger(__name__)

class RerankService:
    """
    設定に従って複数ユーザーの推薦リストを再ランキングする。

    ユーザーごとの処理は独立しているため、parallel_enabled の場合は
    ThreadPoolExecutor で並列に実行する。注入するモデルは読み取り専用であること。
    metric を渡すと、再ランキング後のリストをユーザーごとに評価してログに出す。
    """
    def __init__(
        self,
        config_manager: ConfigManager,
        novelty: Optional[NoveltyModel] = None,
        secondary_score: Optional[UserSecondaryScore] = None,
        metric: Optional[EILD] = None,
        max_workers: int = 4,
    ):
        self.config_manager = config_manager
        self.novelty = novelty
        self.secondary_score = secondary_score
        self.metric = metric
        self.max_workers = max_workers

    def rerank_all(self, recommendations: Iterable[Recommendation]) -> List[Recommendation]:
        """
        Rerank every recommendation. Users that cannot be reranked (no novelty
        model or no secondary score for them) are left out of the result.
        """
        config = self.config_manager.get_config()
        reranker = get_reranker(config, novelty=self.novelty, secondary_score=self.secondary_score)
        recommendations = list(recommendations)

        def task(recommendation: Recommendation) -> Optional[Recommendation]:
            return self._rerank_one(reranker, config.method, config.max_length, recommendation)

        if config.parallel_enabled and len(recommendations) > 1:
            with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                results = list(executor.map(task, recommendations))
        else:
            results = [task(r) for r in recommendations]

        return [r for r in results if r is not None]

    def _rerank_one(
        self,
        reranker: PermutationReranker,
        method: str,
        max_length: int,
        recommendation: Recommendation,
    ) -> Optional[Recommendation]:
        perm = reranker.rerank_permutation(recommendation, max_length)
        if not perm and recommendation.items:
            logger.warning("user %s cannot be reranked, skipped", recommendation.user_id)
            return None

        log_rerank_result(str(uuid.uuid4()), method, recommendation, perm)
        reranked = apply_permutation(recommendation, perm)

        if self.metric is not None:
            log_metric_result("eild", reranked, self.metric.evaluate(reranked))

        return reranked
