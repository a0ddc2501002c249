
import pytest
from novdiv.context import Item, Recommendation
from novdiv.models.adapter import CallableNoveltyModel

@pytest.fixture
def recommendation():
    return Recommendation(user_id="u1", items=[
        Item(id="i0", score=5.0),
        Item(id="i1", score=4.0),
        Item(id="i2", score=3.0),
        Item(id="i3", score=2.0),
        Item(id="i4", score=1.0),
    ])

@pytest.fixture
def novelty_scores():
    return {"i0": 0.1, "i1": 2.0, "i2": 0.5, "i3": 3.0, "i4": 0.2}

@pytest.fixture
def novelty(novelty_scores):
    # u1 のみモデルを持つ
    return CallableNoveltyModel(lambda user: novelty_scores if user == "u1" else None)

class BrokenUserModel:
    def score(self, item):
        raise AssertionError("novelty must not be evaluated")

class BrokenNoveltyModel:
    def get_model(self, user):
        return BrokenUserModel()

@pytest.fixture
def broken_novelty():
    return BrokenNoveltyModel()
