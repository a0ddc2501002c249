
from typing import List, Protocol
from novdiv.context import Recommendation, apply_permutation

class PermutationReranker(Protocol):
    def rerank_permutation(self, recommendation: Recommendation, max_length: int) -> List[int]:
        """
        Recommendationを受け取り、並べ替え後の元位置のリスト(Permutation)を返す。
        空リストは「このユーザーは再ランキングできない」を意味する。
        """
        ...

def effective_length(recommendation: Recommendation, max_length: int) -> int:
    """
    max_length > 0 ならそれを、そうでなければリスト長を、リスト長で切り詰めて返す
    """
    size = len(recommendation.items)
    if max_length > 0:
        return min(max_length, size)
    return size

def check_lambda(lambda_: float) -> float:
    if not 0.0 <= lambda_ <= 1.0:
        raise ValueError(f"lambda must be in [0, 1], got {lambda_}")
    return lambda_

def rerank(reranker: PermutationReranker, recommendation: Recommendation, max_length: int = 0) -> Recommendation:
    """
    Permutation を計算して Recommendation に適用する
    """
    perm = reranker.rerank_permutation(recommendation, max_length)
    return apply_permutation(recommendation, perm)
