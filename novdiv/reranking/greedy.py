
import logging
import math
from typing import Callable, Dict, Hashable, List, Optional, Sequence
from novdiv.context import Item, Recommendation, base_permutation
from novdiv.models.base import ItemDistanceModel, NoveltyModel, UserNoveltyModel
from novdiv.reranking.base import PermutationReranker, check_lambda, effective_length
from novdiv.utils.stats import Stats, normalize

logger = logging.getLogger(__name__)

# (candidate, items already selected in this call) -> secondary score
SecondaryScore = Callable[[Item, Sequence[Item]], float]
# user -> that user's hook, None when the user has no model
UserSecondaryScore = Callable[[Hashable], Optional[SecondaryScore]]

class GreedyReranker(PermutationReranker):
    """
    Greedy iterative reranker for history-dependent objectives.

    The scoring hook is resolved per user at the start of every call; users
    without one get an empty permutation. Only the first `cutoff` items of
    the input are eligible. At every step the secondary score is recomputed
    for the remaining eligible items against what has been selected so far,
    relevance and secondary scores are z-scored over the remaining pool, and
    the best combined score wins (ties go to the smallest original position).
    Items never picked follow in their original order.
    """
    def __init__(self, secondary_score: UserSecondaryScore, lambda_: float = 0.5, cutoff: int = 100, normalize: bool = True):
        if cutoff < 0:
            raise ValueError(f"cutoff must be non-negative, got {cutoff}")
        self.secondary_score = secondary_score
        self.lambda_ = check_lambda(lambda_)
        self.cutoff = cutoff
        self.normalize = normalize

    def rerank_permutation(self, recommendation: Recommendation, max_length: int) -> List[int]:
        score = self.secondary_score(recommendation.user_id)
        if score is None:
            logger.debug("no secondary score for user %s", recommendation.user_id)
            return []

        n = effective_length(recommendation, max_length)

        if self.lambda_ == 0.0:
            return base_permutation(n)

        items = recommendation.items
        window = min(self.cutoff, len(items))
        remaining = list(range(window))
        selected: List[Item] = []
        perm: List[int] = []

        while remaining and len(perm) < min(n, self.cutoff):
            best = self._select(score, items, remaining, selected)
            remaining.remove(best)
            perm.append(best)
            selected.append(items[best])

        logger.debug("user %s: %d greedy picks out of %d eligible", recommendation.user_id, len(perm), window)

        # 残りは元の順序で埋める
        picked = set(perm)
        for i in range(len(items)):
            if len(perm) >= n:
                break
            if i not in picked:
                perm.append(i)

        return perm

    def _select(self, score: SecondaryScore, items: Sequence[Item], remaining: List[int], selected: List[Item]) -> int:
        # 統計量はステップごとに作り直す
        sec_map: Dict[int, float] = {}
        rel_stats = Stats()
        sec_stats = Stats()
        for i in remaining:
            sec = score(items[i], selected)
            sec_map[i] = sec
            rel_stats.accept(items[i].score)
            sec_stats.accept(sec)

        best = remaining[0]
        best_value = float("-inf")
        for i in remaining:
            value = (
                (1 - self.lambda_) * normalize(items[i].score, rel_stats, self.normalize)
                + self.lambda_ * normalize(sec_map[i], sec_stats, self.normalize)
            )
            if value > best_value:
                best = i
                best_value = value

        return best

def novelty_score(user_model: UserNoveltyModel) -> SecondaryScore:
    """
    History-independent hook backed by a user novelty model.
    """
    def _score(item: Item, selected: Sequence[Item]) -> float:
        return user_model.score(item.id)
    return _score

def distance_score(distance_model: ItemDistanceModel) -> SecondaryScore:
    """
    MMR-style hook: mean distance from the candidate to the items already
    selected. Undefined distances are skipped; 0.0 when nothing is selected
    yet or no distance is defined.
    """
    def _score(item: Item, selected: Sequence[Item]) -> float:
        dist = distance_model.dist(item.id)
        total = 0.0
        count = 0
        for other in selected:
            d = dist(other.id)
            if d is None or math.isnan(d):
                continue
            total += d
            count += 1
        if count == 0:
            return 0.0
        return total / count
    return _score

def novelty_scorer(novelty: NoveltyModel) -> UserSecondaryScore:
    """
    Per-user hooks from a novelty model; None for users without a model.
    """
    def _for_user(user: Hashable) -> Optional[SecondaryScore]:
        user_model = novelty.get_model(user)
        if user_model is None:
            return None
        return novelty_score(user_model)
    return _for_user

def distance_scorer(distance_model: ItemDistanceModel) -> UserSecondaryScore:
    """
    The same distance hook for every user.
    """
    score = distance_score(distance_model)
    return lambda user: score
