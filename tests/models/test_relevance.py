
from novdiv.models.relevance import BinaryRelevanceModel, NoRelevanceModel

def test_no_relevance_model():
    model = NoRelevanceModel().get_model("anyone")
    assert model.gain("x") == 1.0

def test_binary_relevance_model():
    relevance = BinaryRelevanceModel({"u1": {"a": 5.0, "b": 3.0}}, threshold=4.0)

    model = relevance.get_model("u1")
    assert model.gain("a") == 1.0
    assert model.gain("b") == 0.0
    assert model.gain("missing") == 0.0

    # テストデータにないユーザーは全て 0
    assert relevance.get_model("u2").gain("a") == 0.0
