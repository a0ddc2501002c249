
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Hashable, List, Optional, Sequence, Tuple

@dataclass
class Item:
    id: Hashable
    score: float
    original_rank: Optional[int] = None
    meta: Dict[str, Any] = field(default_factory=dict)

@dataclass(frozen=True)
class Recommendation:
    user_id: Hashable
    items: Tuple[Item, ...] = ()

    def __post_init__(self):
        # list で渡された場合も tuple に固定する
        object.__setattr__(self, 'items', tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

def base_permutation(length: int) -> List[int]:
    """
    先頭 length 件を元の順序のまま返す恒等置換
    """
    return list(range(max(0, length)))

def apply_permutation(recommendation: Recommendation, perm: Sequence[int]) -> Recommendation:
    """
    Permutation を Recommendation に適用し、新しい Recommendation を返す。
    各 Item には並べ替え前の位置を original_rank として記録する。
    """
    size = len(recommendation.items)
    seen = set()
    items = []
    for p in perm:
        if p < 0 or p >= size:
            raise ValueError(f"position {p} out of range for list of length {size}")
        if p in seen:
            raise ValueError(f"position {p} repeated in permutation")
        seen.add(p)
        items.append(replace(recommendation.items[p], original_rank=p))

    return Recommendation(user_id=recommendation.user_id, items=tuple(items))
