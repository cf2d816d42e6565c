"""游戏规则 - 牌型顺序、百搭、A-5 顺子等可配置项"""

import logging
from enum import Enum
from dataclasses import dataclass
from typing import Optional, Tuple

from .hand_type import HandType

logger = logging.getLogger(__name__)


class WildPolicy(str, Enum):
    """百搭牌可以补哪些点数"""
    NATURAL = "NATURAL"     # 任意点数
    ACE_ONLY = "ACE_ONLY"   # 成组时只能当 A（顺子/同花不受限）


class WheelPolicy(str, Enum):
    """A-2-3-4-5 是否作为单独的顺子"""
    ENABLED = "ENABLED"
    DISABLED = "DISABLED"


STANDARD_ORDER: Tuple[HandType, ...] = (
    HandType.STRAIGHT_FLUSH,
    HandType.FOUR_OF_A_KIND,
    HandType.FULL_HOUSE,
    HandType.FLUSH,
    HandType.STRAIGHT,
    HandType.THREE_OF_A_KIND,
    HandType.TWO_PAIR,
    HandType.ONE_PAIR,
    HandType.HIGH_CARD,
)

ROYAL_ORDER: Tuple[HandType, ...] = (HandType.ROYAL_FLUSH,) + STANDARD_ORDER

THREE_CARD_ORDER: Tuple[HandType, ...] = (
    HandType.STRAIGHT_FLUSH,
    HandType.THREE_OF_A_KIND,
    HandType.STRAIGHT,
    HandType.FLUSH,
    HandType.ONE_PAIR,
    HandType.HIGH_CARD,
)


@dataclass(frozen=True)
class RuleSet:
    """一种玩法的判定规则"""
    name: str = "standard"
    cards_per_hand: int = 5
    evaluator_order: Tuple[HandType, ...] = STANDARD_ORDER   # 从强到弱
    wild_value: Optional[str] = None                          # None = 无百搭
    wild_policy: WildPolicy = WildPolicy.NATURAL
    wheel_policy: WheelPolicy = WheelPolicy.DISABLED
    qualify_length: int = 5                                   # 顺子/同花最少张数
    lowest_qualifying_hand: Optional[Tuple[str, ...]] = None
    suppress_kickers: bool = False
    allow_duplicates: bool = False

    @property
    def forbids_duplicates(self) -> bool:
        return self.wild_value is None and not self.allow_duplicates

    @property
    def wheel_enabled(self) -> bool:
        return self.wheel_policy == WheelPolicy.ENABLED


GAME_RULES = {
    "standard": RuleSet(),
    "jacksbetter": RuleSet(
        name="jacksbetter",
        evaluator_order=ROYAL_ORDER,
        lowest_qualifying_hand=("Jc", "Jd", "4h", "3s", "2c"),
    ),
    "deuceswild": RuleSet(
        name="deuceswild",
        evaluator_order=ROYAL_ORDER,
        wild_value="2",
        lowest_qualifying_hand=("3c", "3d", "3h", "5s", "4c"),
    ),
    "threecard": RuleSet(
        name="threecard",
        cards_per_hand=3,
        evaluator_order=THREE_CARD_ORDER,
        qualify_length=3,
        lowest_qualifying_hand=("Qh", "3s", "2c"),
    ),
    "paigow": RuleSet(
        name="paigow",
        wild_value="O",
        wild_policy=WildPolicy.ACE_ONLY,
        wheel_policy=WheelPolicy.ENABLED,
    ),
}


def get_rules(name: Optional[str] = None) -> RuleSet:
    """按玩法名取规则，未知名称回退到 standard"""
    if not name:
        return GAME_RULES["standard"]
    rules = GAME_RULES.get(name.lower())
    if rules is None:
        logger.warning("未知玩法 %r，使用 standard 规则", name)
        return GAME_RULES["standard"]
    return rules
