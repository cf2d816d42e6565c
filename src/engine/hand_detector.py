"""牌型检测器 - 按规则中的牌型顺序依次尝试，构建 Hand"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Union

from .card import (
    ACE_RANK, VALUES, Card, CardLike, DuplicateCardError, parse_cards, sort_cards,
)
from .hand_type import HAND_NAMES, Hand, HandType
from .rules import RuleSet, WildPolicy, get_rules
from .straight import find_straight, with_low_aces

logger = logging.getLogger(__name__)


# ============================================================
#  单次尝试的状态
# ============================================================

class _Attempt:
    """
    一个牌型的一次尝试：排序后的牌池、花色索引、点数索引、百搭指定表。
    每个牌型检测前都新建一个，上一个牌型对百搭的指定不会带过来。
    """

    def __init__(self, cards: Iterable[Card], rules: RuleSet):
        self.rules = rules
        self.pool = sort_cards(c.reset() for c in cards)
        self.wilds = [c for c in self.pool if c.wild]
        self.suits: Dict[str, List[Card]] = {}
        # 下标 i 对应点数 ACE_RANK - i，即从 A 到 2
        self.values: List[List[Card]] = [[] for _ in range(ACE_RANK)]
        for card in self.pool:
            if card.wild:
                continue
            self.suits.setdefault(card.suit, []).append(card)
            self.values[ACE_RANK - card.rank].append(card)
        self._resolved: Dict[int, Card] = {}

    # ---------- 百搭 ----------

    def unresolved_wilds(self) -> List[Card]:
        return [w for w in self.wilds if w.slot not in self._resolved]

    def claim_wild(self, rank: int) -> Card:
        """取下一张未指定的百搭，指定为 rank"""
        wild = self.unresolved_wilds()[0].resolve(rank)
        self._resolved[wild.slot] = wild
        return wild

    def adopt(self, cards: Iterable[Card]) -> None:
        """记录 cards 中已指定点数的百搭"""
        for card in cards:
            if card.wild and card.is_resolved:
                self._resolved[card.slot] = card

    def reset_wilds(self) -> None:
        self._resolved.clear()

    def check_cards(self) -> List[Card]:
        """参与顺子判定的牌：普通牌 + 已指定的百搭 + 低位 A"""
        cards = [c for c in self.pool if not c.wild] + list(self._resolved.values())
        return with_low_aces(cards)

    # ---------- 同点数成组 ----------

    def count_with_wilds(self, index: int) -> int:
        """该点数的牌数，加上能补进来的百搭"""
        count = len(self.values[index])
        if self.rules.wild_policy == WildPolicy.NATURAL or index == 0:
            count += len(self.unresolved_wilds())
        return count

    def find_group(self, size: int, start: int = 0,
                   exclude_value: Optional[str] = None) -> Optional[int]:
        """从大到小找第一个凑得够 size 张的点数，返回其下标"""
        for index in range(start, len(self.values)):
            if exclude_value is not None and VALUES[ACE_RANK - index] == exclude_value:
                continue
            if self.count_with_wilds(index) >= size:
                return index
        return None

    def take_group(self, index: int, size: int) -> List[Card]:
        """取出该点数的 size 张，不够的用百搭补"""
        group = self.values[index][:size]
        while len(group) < size:
            group.append(self.claim_wild(ACE_RANK - index))
        return group

    # ---------- 踢脚牌 ----------

    def kickers(self, taken: List[Card], count: int) -> List[Card]:
        """剩余牌中最大的 count 张，剩下的百搭当 A"""
        if count <= 0:
            return []
        used = {c.slot for c in taken}
        rest = []
        for card in self.pool:
            if card.slot in used:
                continue
            card = self._resolved.get(card.slot, card)
            if not card.is_resolved:
                card = card.resolve(ACE_RANK)
            rest.append(card)
        picks = sort_cards(rest)[:count]
        self.adopt(picks)
        return picks


@dataclass
class _Match:
    """某个牌型检测成功的结果"""
    cards: List[Card]
    description: str
    name: str


# ============================================================
#  辅助函数
# ============================================================

def _with_kickers(attempt: _Attempt, pattern: List[Card]) -> List[Card]:
    """牌型牌 + 踢脚牌补满一手；规则不要踢脚牌时只留牌型牌"""
    if attempt.rules.suppress_kickers:
        return list(pattern)
    need = attempt.rules.cards_per_hand - len(pattern)
    return list(pattern) + attempt.kickers(pattern, need)


def _ranks(cards: List[Card]) -> List[int]:
    return [c.rank for c in cards]


def _flush_cards(suited: List[Card], wilds: List[Card]) -> List[Card]:
    """同花色的牌 + 百搭，百搭依次补到从 A 往下第一个空缺的点数"""
    cards = list(suited)
    for wild in wilds:
        rank = ACE_RANK
        for card in cards:
            if card.rank != rank:
                break
            rank -= 1
        cards = sort_cards(cards + [wild.resolve(rank)])
    return cards


# ============================================================
#  同花顺
# ============================================================

def _detect_straight_flush(attempt: _Attempt) -> Optional[_Match]:
    """同花顺：每个花色（加上百搭）单独找顺子，取最大的"""
    rules = attempt.rules
    best = None
    for suit, suited in attempt.suits.items():
        if len(suited) + len(attempt.wilds) < rules.qualify_length:
            continue
        found = find_straight(_Attempt(suited + attempt.wilds, rules))
        if found is None:
            continue
        run, wheel = found
        if best is None or _ranks(run) > _ranks(best[0]):
            best = (run, wheel, suit)

    if best is None:
        return None

    run, wheel, suit = best
    attempt.adopt(run)
    cards = _with_kickers(attempt, run)
    if wheel:
        return _Match(cards, "Straight Flush, Wheel", HAND_NAMES[HandType.STRAIGHT_FLUSH])
    if run[0].rank == ACE_RANK:
        return _Match(cards, "Royal Flush", HAND_NAMES[HandType.ROYAL_FLUSH])
    return _Match(
        cards,
        f"Straight Flush, {run[0].display_value}{suit} High",
        HAND_NAMES[HandType.STRAIGHT_FLUSH],
    )


def _detect_royal_flush(attempt: _Attempt) -> Optional[_Match]:
    """皇家同花顺：A 打头的同花顺（A-5 不算）"""
    match = _detect_straight_flush(attempt)
    if match is None or match.name != HAND_NAMES[HandType.ROYAL_FLUSH]:
        return None
    return match


# ============================================================
#  同点数牌型
# ============================================================

def _detect_group(attempt: _Attempt, size: int, hand_type: HandType) -> Optional[_Match]:
    """四条/三条/一对：最大的够数点数 + 踢脚牌"""
    index = attempt.find_group(size)
    if index is None:
        return None
    group = attempt.take_group(index, size)

    # 点数本身已凑够时，空闲的百搭也当该点数，不再留作 A 踢脚牌
    natural = len(attempt.values[index])
    if (natural >= size and attempt.count_with_wilds(index) > natural
            and len(group) < attempt.rules.cards_per_hand):
        group.append(attempt.claim_wild(ACE_RANK - index))

    name = HAND_NAMES[hand_type]
    return _Match(
        _with_kickers(attempt, group),
        f"{name}, {group[0].display_value}'s",
        name,
    )


def _detect_four_of_a_kind(attempt: _Attempt) -> Optional[_Match]:
    return _detect_group(attempt, 4, HandType.FOUR_OF_A_KIND)


def _detect_three_of_a_kind(attempt: _Attempt) -> Optional[_Match]:
    return _detect_group(attempt, 3, HandType.THREE_OF_A_KIND)


def _detect_one_pair(attempt: _Attempt) -> Optional[_Match]:
    return _detect_group(attempt, 2, HandType.ONE_PAIR)


def _detect_full_house(attempt: _Attempt) -> Optional[_Match]:
    """葫芦：先找三条，再在面值不同的点数里找对子"""
    triple_at = attempt.find_group(3)
    if triple_at is None:
        return None
    triple = attempt.take_group(triple_at, 3)

    # 按面值排除三条的点数（百搭当 A 组成三条时，对子落到 K）
    pair_at = attempt.find_group(2, exclude_value=triple[0].resolved_value)
    if pair_at is None:
        return None
    pair = attempt.take_group(pair_at, 2)

    name = HAND_NAMES[HandType.FULL_HOUSE]
    return _Match(
        _with_kickers(attempt, triple + pair),
        f"{name}, {triple[0].display_value}'s over {pair[0].display_value}'s",
        name,
    )


def _detect_two_pair(attempt: _Attempt) -> Optional[_Match]:
    """两对：第一个对子之后继续往下找第二个"""
    first_at = attempt.find_group(2)
    if first_at is None:
        return None
    first = attempt.take_group(first_at, 2)

    second_at = attempt.find_group(2, start=first_at + 1)
    if second_at is None:
        return None
    second = attempt.take_group(second_at, 2)

    name = HAND_NAMES[HandType.TWO_PAIR]
    return _Match(
        _with_kickers(attempt, first + second),
        f"{name}, {first[0].display_value}'s & {second[0].display_value}'s",
        name,
    )


# ============================================================
#  同花 / 顺子 / 高牌
# ============================================================

def _detect_flush(attempt: _Attempt) -> Optional[_Match]:
    """同花：够 qualify_length 张的花色里取最大的一组"""
    rules = attempt.rules
    best = None
    for suit, suited in attempt.suits.items():
        if len(suited) + len(attempt.wilds) < rules.qualify_length:
            continue
        flush = _flush_cards(suited, attempt.wilds)[:rules.cards_per_hand]
        if best is None or _ranks(flush) > _ranks(best[0]):
            best = (flush, suit)

    if best is None:
        return None

    flush, suit = best
    attempt.adopt(flush)
    name = HAND_NAMES[HandType.FLUSH]
    return _Match(
        _with_kickers(attempt, flush),
        f"{name}, {flush[0].display_value}{suit} High",
        name,
    )


def _detect_straight(attempt: _Attempt) -> Optional[_Match]:
    """顺子：开启 A-5 规则时先找 A-5，再按缺口计数找最大的顺子"""
    found = find_straight(attempt)
    if found is None:
        return None
    run, wheel = found
    name = HAND_NAMES[HandType.STRAIGHT]
    description = f"{name}, Wheel" if wheel else f"{name}, {run[0].display_value} High"
    return _Match(_with_kickers(attempt, run), description, name)


def _detect_high_card(attempt: _Attempt) -> _Match:
    """高牌：最大的几张，百搭当 A。总能成立"""
    rules = attempt.rules
    cards = [c if c.is_resolved else c.resolve(ACE_RANK) for c in attempt.pool]
    cards = sort_cards(cards)[:rules.cards_per_hand]
    if rules.suppress_kickers:
        cards = cards[:1]
    attempt.adopt(cards)

    name = HAND_NAMES[HandType.HIGH_CARD]
    if not cards:
        return _Match([], name, name)
    return _Match(cards, f"{cards[0].display_value} High", name)


_DETECTORS: Dict[HandType, Callable[[_Attempt], Optional[_Match]]] = {
    HandType.ROYAL_FLUSH: _detect_royal_flush,
    HandType.STRAIGHT_FLUSH: _detect_straight_flush,
    HandType.FOUR_OF_A_KIND: _detect_four_of_a_kind,
    HandType.FULL_HOUSE: _detect_full_house,
    HandType.FLUSH: _detect_flush,
    HandType.STRAIGHT: _detect_straight,
    HandType.THREE_OF_A_KIND: _detect_three_of_a_kind,
    HandType.TWO_PAIR: _detect_two_pair,
    HandType.ONE_PAIR: _detect_one_pair,
    HandType.HIGH_CARD: _detect_high_card,
}


# ============================================================
#  入口
# ============================================================

def _check_duplicates(pool: List[Card]) -> None:
    seen = set()
    for card in pool:
        key = (card.value, card.suit)
        if key in seen:
            raise DuplicateCardError(f"重复的牌: {card}")
        seen.add(key)


def _build_hand(attempt: _Attempt, hand_type: HandType, match: _Match,
                strength: int, can_disqualify: bool) -> Hand:
    """把成功的尝试整理成 Hand；百搭只保留最终选中牌里的指定"""
    chosen = {c.slot: c for c in match.cards if c.wild}
    return Hand(
        type=hand_type,
        name=match.name,
        cards=match.cards,
        description=match.description,
        strength=strength,
        rules=attempt.rules,
        card_pool=[chosen.get(c.slot, c) for c in attempt.pool],
        wilds=[chosen.get(w.slot, w) for w in attempt.wilds],
        suit_index=attempt.suits,
        rank_index=attempt.values,
        can_disqualify=can_disqualify,
    )


def classify(cards: Union[str, Iterable[CardLike]],
             rules: Union[RuleSet, str, None] = None,
             can_disqualify: bool = True) -> Hand:
    """
    判定一组牌能组成的最大牌型。
    rules 可以是 RuleSet、玩法名或 None（standard）。
    按 rules.evaluator_order 从强到弱依次尝试，第一个成立的即为结果；
    strength = 牌型总数 - 该牌型的位置。
    """
    if not isinstance(rules, RuleSet):
        rules = get_rules(rules)

    pool = parse_cards(cards, rules.wild_value)
    if rules.forbids_duplicates:
        _check_duplicates(pool)

    order = rules.evaluator_order
    for position, hand_type in enumerate(order):
        attempt = _Attempt(pool, rules)
        match = _DETECTORS[hand_type](attempt)
        if match is not None:
            logger.debug("%s -> %s", " ".join(str(c) for c in pool), match.description)
            return _build_hand(attempt, hand_type, match, len(order) - position, can_disqualify)

    # 规则里没有高牌且所有牌型都不成立
    logger.warning("规则 %s 下没有成立的牌型: %s",
                   rules.name, " ".join(str(c) for c in pool))
    attempt = _Attempt(pool, rules)
    hand_type = order[-1] if order else HandType.HIGH_CARD
    return Hand(
        type=hand_type,
        name=HAND_NAMES[hand_type],
        cards=[],
        description="",
        strength=min(len(order), 1),
        rules=rules,
        card_pool=attempt.pool,
        wilds=attempt.wilds,
        suit_index=attempt.suits,
        rank_index=attempt.values,
        is_formable=False,
        can_disqualify=can_disqualify,
    )
