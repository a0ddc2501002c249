
import math
from novdiv.models.base import RankingDiscountModel

class NoDiscount(RankingDiscountModel):
    def disc(self, rank: int) -> float:
        return 1.0

class LogarithmicDiscount(RankingDiscountModel):
    """
    nDCG-style discount: 1 / log2(rank + 2)
    """
    def disc(self, rank: int) -> float:
        return 1.0 / math.log2(rank + 2)

class ExponentialDiscount(RankingDiscountModel):
    """
    RBP-style discount: patience ** rank
    """
    def __init__(self, patience: float):
        if not 0.0 <= patience <= 1.0:
            raise ValueError(f"patience must be in [0, 1], got {patience}")
        self.patience = patience

    def disc(self, rank: int) -> float:
        return self.patience ** rank

class ReciprocalDiscount(RankingDiscountModel):
    def disc(self, rank: int) -> float:
        return 1.0 / (rank + 1)
