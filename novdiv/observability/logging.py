
import json
import logging
from typing import List
from novdiv.context import Recommendation

logger = logging.getLogger("novdiv")
logger.setLevel(logging.INFO)
# Handler設定は実行環境に依存するため、ここでは標準出力への出力のみを想定
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter('%(message)s'))
logger.addHandler(handler)

def log_rerank_result(rerank_id: str, method: str, recommendation: Recommendation, perm: List[int]):
    """
    再ランキング結果を構造化ログ(JSON)として出力する。
    recommendation は並べ替え前のもの。original_rank は Item と同じ0始まり。
    """

    log_data = {
        "event": "rerank_generated",
        "rerank_id": rerank_id,
        "method": method,
        "user_id": str(recommendation.user_id),
        "items": [
            {
                "id": str(recommendation.items[p].id),
                "score": recommendation.items[p].score,
                "rank": i + 1,
                "original_rank": p
            }
            for i, p in enumerate(perm)
        ]
    }

    logger.info(json.dumps(log_data))

def log_metric_result(metric: str, recommendation: Recommendation, value: float):
    """
    評価指標の値を構造化ログ(JSON)として出力する。
    """

    log_data = {
        "event": "metric_evaluated",
        "metric": metric,
        "user_id": str(recommendation.user_id),
        "length": len(recommendation.items),
        "value": value
    }

    logger.info(json.dumps(log_data))
