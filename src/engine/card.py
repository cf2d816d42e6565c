"""牌的定义 - 扑克牌面值、花色、记号解析"""

from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Union


# 面值表：下标即 rank。"1" 是 A 作为最小牌时的占位，不接受输入
VALUES = ["1", "2", "3", "4", "5", "6", "7", "8", "9", "T", "J", "Q", "K", "A"]
RANK_OF = {v: i for i, v in enumerate(VALUES)}

ACE_RANK = RANK_OF["A"]
LOW_ACE_RANK = 0
WILD_RANK = -1          # 尚未指定点数的百搭牌

SUITS = ("s", "h", "d", "c")
RED_SUITS = {"h", "d"}


class CardParseError(ValueError):
    """牌面记号无法解析"""


class DuplicateCardError(ValueError):
    """不允许重复的规则下出现了相同面值+花色的牌"""


def display_value(value: str) -> str:
    """面值 → 显示文本（T 显示为 10，低位 A 仍显示为 A）"""
    if value == "T":
        return "10"
    if value == "1":
        return "A"
    return value


@dataclass(frozen=True)
class Card:
    """一张牌

    value/suit 是牌面事实；rank/resolved_value 是当前生效的点数，
    普通牌二者与牌面一致，百搭牌在被指定位置前 rank 为 -1。
    slot 是该牌在输入中的位置，用作身份标识。
    """
    value: str
    suit: str
    rank: int
    resolved_value: str
    wild: bool = False
    slot: int = -1

    @classmethod
    def parse(cls, text: str, wild_value: Optional[str] = None, slot: int = -1) -> "Card":
        """解析 'Ah' / 'Td' / '10d' / 'Os' 形式的记号"""
        text = text.strip()
        if len(text) == 3 and text[:2] == "10":
            text = "T" + text[2]
        if len(text) != 2:
            raise CardParseError(f"无法解析的牌: {text!r}")

        value, suit = text[0].upper(), text[1].lower()
        if suit not in SUITS:
            raise CardParseError(f"未知花色: {text!r}")

        if wild_value is not None and value == wild_value.upper():
            return cls(value, suit, WILD_RANK, value, wild=True, slot=slot)
        if value not in RANK_OF or value == "1":
            raise CardParseError(f"未知面值: {text!r}")
        return cls(value, suit, RANK_OF[value], value, slot=slot)

    @property
    def is_resolved(self) -> bool:
        return self.rank != WILD_RANK

    @property
    def display_value(self) -> str:
        return display_value(self.resolved_value)

    def resolve(self, rank: int) -> "Card":
        """指定百搭牌的点数，返回新牌"""
        return replace(self, rank=rank, resolved_value=VALUES[rank])

    def reset(self) -> "Card":
        """百搭牌恢复为未指定状态；普通牌原样返回"""
        if not self.wild:
            return self
        return replace(self, rank=WILD_RANK, resolved_value=self.value)

    def as_low_ace(self) -> "Card":
        """A 的低位副本（rank 0），与原牌共享 slot"""
        return replace(self, rank=LOW_ACE_RANK, resolved_value=VALUES[LOW_ACE_RANK])

    def __str__(self) -> str:
        return f"{self.display_value}{self.suit}"

    def __repr__(self) -> str:
        return str(self)


CardLike = Union[str, Card]


def parse_cards(cards: Union[str, Iterable[CardLike]],
                wild_value: Optional[str] = None) -> List[Card]:
    """解析一组牌，按输入顺序分配 slot

    接受空格分隔的字符串、记号列表或 Card 列表。
    Card 会按当前的百搭面值重新判定。
    """
    if isinstance(cards, str):
        cards = cards.split()

    parsed: List[Card] = []
    for slot, card in enumerate(cards):
        text = f"{card.value}{card.suit}" if isinstance(card, Card) else card
        parsed.append(Card.parse(text, wild_value, slot))
    return parsed


def sort_cards(cards: Iterable[Card]) -> List[Card]:
    """按点数从大到小排序（稳定排序，未指定的百搭排在最后）"""
    return sorted(cards, key=lambda c: c.rank, reverse=True)
