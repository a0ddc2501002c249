
import pytest
from novdiv.context import Item, Recommendation
from novdiv.models.adapter import CallableNoveltyModel, MappingDistanceModel
from novdiv.reranking.greedy import (
    GreedyReranker,
    distance_score,
    distance_scorer,
    novelty_score,
    novelty_scorer,
)
from novdiv.reranking.oneshot import ItemNoveltyReranker

def broken_score(item, selected):
    raise AssertionError("secondary score must not be evaluated")

def constant_score(item, selected):
    return 1.0

def for_everyone(score):
    return lambda user: score

@pytest.mark.parametrize("max_length, expected", [
    (0, [0, 1, 2, 3, 4]),
    (2, [0, 1]),
])
def test_lambda_zero_is_identity_without_scoring(recommendation, max_length, expected):
    reranker = GreedyReranker(for_everyone(broken_score), lambda_=0.0, cutoff=10)
    assert reranker.rerank_permutation(recommendation, max_length) == expected

def test_cutoff_zero_keeps_original_order(recommendation):
    reranker = GreedyReranker(for_everyone(broken_score), lambda_=0.5, cutoff=0)
    assert reranker.rerank_permutation(recommendation, 0) == [0, 1, 2, 3, 4]

def test_missing_hook_returns_empty_permutation(recommendation, novelty):
    reranker = GreedyReranker(novelty_scorer(novelty), lambda_=0.5)
    other = Recommendation(user_id="unknown", items=recommendation.items)

    assert reranker.rerank_permutation(other, 0) == []
    assert GreedyReranker(novelty_scorer(novelty), lambda_=0.0).rerank_permutation(other, 0) == []

def test_hook_is_resolved_per_user():
    novelty = CallableNoveltyModel(lambda user: {"u1": {"c": 10.0}, "u2": {"a": 10.0}}.get(user))
    reranker = GreedyReranker(novelty_scorer(novelty), lambda_=0.9, cutoff=10, normalize=False)
    items = [Item(id="a", score=3.0), Item(id="b", score=2.0), Item(id="c", score=1.0)]

    assert reranker.rerank_permutation(Recommendation(user_id="u1", items=items), 0) == [2, 0, 1]
    assert reranker.rerank_permutation(Recommendation(user_id="u2", items=items), 0) == [0, 1, 2]

@pytest.mark.parametrize("max_length", [0, 3])
def test_history_independent_score_matches_oneshot(recommendation, novelty, max_length):
    """
    履歴に依存しないスコアでは One-shot と同じ結果になること。
    正規化なしの場合に限る: Greedy は残りの候補だけで毎ステップ正規化し直すため、
    normalize=True では One-shot と順序が一致しないことがある。
    """
    oneshot = ItemNoveltyReranker(novelty, lambda_=0.5, normalize=False)
    greedy = GreedyReranker(novelty_scorer(novelty), lambda_=0.5, cutoff=100, normalize=False)

    expected = oneshot.rerank_permutation(recommendation, max_length)
    assert greedy.rerank_permutation(recommendation, max_length) == expected
    assert expected[:3] == [1, 0, 3]

def test_history_dependent_score_promotes_distant_item():
    rec = Recommendation(user_id="u", items=[
        Item(id="a", score=3.0),
        Item(id="b", score=2.9),
        Item(id="c", score=1.0),
    ])
    distances = MappingDistanceModel({("a", "b"): 0.0, ("a", "c"): 1.0, ("b", "c"): 1.0})
    reranker = GreedyReranker(distance_scorer(distances), lambda_=0.8, cutoff=10, normalize=False)

    # 1手目: a / 2手目: b=0.58, c=1.0 で c / 3手目: b
    assert reranker.rerank_permutation(rec, 0) == [0, 2, 1]

def test_only_cutoff_window_is_eligible():
    rec = Recommendation(user_id="u", items=[
        Item(id="a", score=1.0),
        Item(id="b", score=3.0),
        Item(id="c", score=10.0),
        Item(id="d", score=9.0),
    ])
    reranker = GreedyReranker(for_everyone(constant_score), lambda_=0.5, cutoff=2, normalize=False)
    assert reranker.rerank_permutation(rec, 0) == [1, 0, 2, 3]

def test_max_length_bounds_steps():
    rec = Recommendation(user_id="u", items=[Item(id=str(i), score=float(i)) for i in range(4)])
    hook = for_everyone(constant_score)

    assert GreedyReranker(hook, lambda_=0.5, cutoff=10, normalize=False).rerank_permutation(rec, 2) == [3, 2]
    assert GreedyReranker(hook, lambda_=0.5, cutoff=1, normalize=False).rerank_permutation(rec, 3) == [0, 1, 2]

def test_score_recomputed_every_step(recommendation):
    seen = []

    def recording_score(item, selected):
        seen.append(len(selected))
        return 0.0

    reranker = GreedyReranker(for_everyone(recording_score), lambda_=0.5, cutoff=3)
    perm = reranker.rerank_permutation(recommendation, 0)

    assert seen == [0, 0, 0, 1, 1, 2]
    assert perm == [0, 1, 2, 3, 4]

def test_constant_score_with_normalization_keeps_order(recommendation):
    reranker = GreedyReranker(for_everyone(constant_score), lambda_=1.0, cutoff=10)
    assert reranker.rerank_permutation(recommendation, 0) == [0, 1, 2, 3, 4]

def test_distance_score_skips_undefined():
    distances = MappingDistanceModel({("a", "b"): 0.4, ("a", "c"): float("nan")})
    score = distance_score(distances)

    assert score(Item(id="a", score=1.0), []) == 0.0
    assert score(Item(id="a", score=1.0), [Item(id="b", score=1.0), Item(id="c", score=1.0), Item(id="d", score=1.0)]) == pytest.approx(0.4)
    assert score(Item(id="c", score=1.0), [Item(id="d", score=1.0)]) == 0.0

def test_distance_scorer_is_shared_by_all_users():
    scorer = distance_scorer(MappingDistanceModel({("a", "b"): 0.4}))
    assert scorer("u1") is scorer("u2")

def test_novelty_score_ignores_history():
    score = novelty_score(CallableNoveltyModel(lambda user: {"a": 0.7}).get_model("u"))
    assert score(Item(id="a", score=1.0), []) == 0.7
    assert score(Item(id="a", score=1.0), [Item(id="b", score=1.0)]) == 0.7

def test_invalid_arguments_raise():
    with pytest.raises(ValueError):
        GreedyReranker(for_everyone(constant_score), lambda_=2.0)
    with pytest.raises(ValueError):
        GreedyReranker(for_everyone(constant_score), cutoff=-1)
