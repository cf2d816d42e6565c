"""牌型定义 - 十种牌型与判定结果"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, List, TYPE_CHECKING

from .card import Card

if TYPE_CHECKING:
    from .rules import RuleSet


class HandType(str, Enum):
    """牌型枚举"""
    ROYAL_FLUSH = "ROYAL_FLUSH"            # 皇家同花顺（单独计算时使用）
    STRAIGHT_FLUSH = "STRAIGHT_FLUSH"      # 同花顺
    FOUR_OF_A_KIND = "FOUR_OF_A_KIND"      # 四条
    FULL_HOUSE = "FULL_HOUSE"              # 葫芦
    FLUSH = "FLUSH"                        # 同花
    STRAIGHT = "STRAIGHT"                  # 顺子
    THREE_OF_A_KIND = "THREE_OF_A_KIND"    # 三条
    TWO_PAIR = "TWO_PAIR"                  # 两对
    ONE_PAIR = "ONE_PAIR"                  # 一对
    HIGH_CARD = "HIGH_CARD"                # 高牌


HAND_NAMES = {
    HandType.ROYAL_FLUSH: "Royal Flush",
    HandType.STRAIGHT_FLUSH: "Straight Flush",
    HandType.FOUR_OF_A_KIND: "Four of a Kind",
    HandType.FULL_HOUSE: "Full House",
    HandType.FLUSH: "Flush",
    HandType.STRAIGHT: "Straight",
    HandType.THREE_OF_A_KIND: "Three of a Kind",
    HandType.TWO_PAIR: "Two Pair",
    HandType.ONE_PAIR: "Pair",
    HandType.HIGH_CARD: "High Card",
}


@dataclass
class Hand:
    """一手牌的判定结果"""
    type: HandType
    name: str
    cards: List[Card]            # 组成牌型的牌（牌型牌在前，踢脚牌在后）
    description: str
    strength: int                # 牌型强度，数值越大越强
    rules: "RuleSet"
    card_pool: List[Card] = field(default_factory=list)
    wilds: List[Card] = field(default_factory=list)
    suit_index: Dict[str, List[Card]] = field(default_factory=dict)
    rank_index: List[List[Card]] = field(default_factory=list)
    is_formable: bool = True
    can_disqualify: bool = True

    def to_display_string(self) -> str:
        return ", ".join(str(c) for c in self.cards)

    def to_card_strings(self) -> List[str]:
        return [str(c) for c in self.cards]

    def reset_wilds(self) -> None:
        """百搭牌池和牌池中的百搭恢复为未指定点数

        cards 是判定结果的快照，比牌依赖它，保持不变。
        """
        self.wilds = [w.reset() for w in self.wilds]
        self.card_pool = [c.reset() for c in self.card_pool]

    def __repr__(self) -> str:
        return f"[{self.name}] {self.to_display_string()}"
