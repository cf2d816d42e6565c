"""牌型比较 - 两手牌比大小、最低资格判定、选出赢家"""

import logging
from functools import lru_cache
from typing import Iterable, List

from .hand_detector import classify
from .hand_type import Hand
from .rules import RuleSet

logger = logging.getLogger(__name__)

# 同牌型时逐张比较的张数
COMPARE_DEPTH = 5


def compare(a: Hand, b: Hand) -> int:
    """
    比较两手牌：a 大返回 -1，b 大返回 1，一样大返回 0。
    先比牌型强度，再逐张比点数。
    """
    if a.strength != b.strength:
        return -1 if a.strength > b.strength else 1

    for mine, theirs in zip(a.cards[:COMPARE_DEPTH], b.cards[:COMPARE_DEPTH]):
        if mine.rank != theirs.rank:
            return -1 if mine.rank > theirs.rank else 1
    return 0


def loses_to(hand: Hand, other: Hand) -> bool:
    return compare(hand, other) > 0


@lru_cache(maxsize=32)
def _qualifier(rules: RuleSet) -> Hand:
    """规则的最低资格牌（每种规则只判定一次）"""
    return classify(list(rules.lowest_qualifying_hand), rules, can_disqualify=False)


def qualifies_high(hand: Hand) -> bool:
    """是否达到规则要求的最低牌（不小于它即可）"""
    if not hand.rules.lowest_qualifying_hand or not hand.can_disqualify:
        return True
    return compare(hand, _qualifier(hand.rules)) <= 0


def winners(hands: Iterable[Hand]) -> List[Hand]:
    """
    选出赢家：
    1. 去掉不成立或未达资格的牌
    2. 只留牌型强度最高的
    3. 去掉输给其他任何一手的
    平局时返回多手（分池）。
    """
    candidates = []
    for hand in hands:
        if not hand.is_formable:
            logger.debug("牌型不成立，跳过: %r", hand)
            continue
        if not qualifies_high(hand):
            logger.debug("未达最低资格: %r", hand)
            continue
        candidates.append(hand)

    if not candidates:
        return []

    top = max(h.strength for h in candidates)
    candidates = [h for h in candidates if h.strength == top]
    return [h for h in candidates if not any(loses_to(h, other) for other in candidates)]
