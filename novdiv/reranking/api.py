
from typing import Optional
from novdiv.config import RerankConfig
from novdiv.models.base import NoveltyModel
from novdiv.reranking.base import PermutationReranker
from novdiv.reranking.greedy import GreedyReranker, UserSecondaryScore, novelty_scorer
from novdiv.reranking.oneshot import ItemNoveltyReranker

def get_reranker(
    config: RerankConfig,
    novelty: Optional[NoveltyModel] = None,
    secondary_score: Optional[UserSecondaryScore] = None,
) -> PermutationReranker:
    """
    Factory function to get the appropriate reranker instance.

    Args:
        config (RerankConfig): method is "greedy" (history-dependent secondary
            objective) or "oneshot" (history-independent novelty). Unknown
            methods fall back to "oneshot".
        novelty (Optional[NoveltyModel]): per-user novelty lookup, required by "oneshot".
            "greedy" uses it as its hook when no secondary_score is given.
        secondary_score (Optional[UserSecondaryScore]): per-user scoring hook for "greedy"

    Returns:
        PermutationReranker: An instance of a class implementing rerank_permutation.
    """
    if config.method == "greedy":
        if secondary_score is None:
            if novelty is None:
                raise ValueError("greedy reranking requires a secondary_score hook or a novelty model")
            secondary_score = novelty_scorer(novelty)
        return GreedyReranker(
            secondary_score,
            lambda_=config.lambda_,
            cutoff=config.cutoff,
            normalize=config.normalize,
        )

    # Default or "oneshot"
    if novelty is None:
        raise ValueError("oneshot reranking requires a novelty model")
    return ItemNoveltyReranker(novelty, lambda_=config.lambda_, normalize=config.normalize)
