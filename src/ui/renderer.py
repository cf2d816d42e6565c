"""终端渲染器 - 在终端中展示牌型判定与比牌结果"""

from typing import List

from src.engine.card import Card, RED_SUITS
from src.engine.hand_type import Hand, HandType


# 颜色常量 (ANSI)
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
CYAN = "\033[96m"
BOLD = "\033[1m"
DIM = "\033[2m"
RESET = "\033[0m"

# 牌型中文名
HAND_TYPE_NAME = {
    HandType.ROYAL_FLUSH: "皇家同花顺",
    HandType.STRAIGHT_FLUSH: "同花顺",
    HandType.FOUR_OF_A_KIND: "四条",
    HandType.FULL_HOUSE: "葫芦",
    HandType.FLUSH: "同花",
    HandType.STRAIGHT: "顺子",
    HandType.THREE_OF_A_KIND: "三条",
    HandType.TWO_PAIR: "两对",
    HandType.ONE_PAIR: "一对",
    HandType.HIGH_CARD: "高牌",
}


class TerminalRenderer:
    """终端渲染器"""

    def __init__(self, color: bool = True):
        self.color = color

    def _paint(self, text: str, *styles: str) -> str:
        if not self.color or not styles:
            return text
        return f"{''.join(styles)}{text}{RESET}"

    # ============================================================
    #  牌面渲染
    # ============================================================

    def format_card(self, card: Card) -> str:
        """单张牌；红色花色高亮，百搭用青色"""
        if card.wild:
            return self._paint(str(card), CYAN)
        if card.suit in RED_SUITS:
            return self._paint(str(card), RED)
        return str(card)

    def format_cards(self, cards: List[Card]) -> str:
        """将牌列表格式化为字符串"""
        return " ".join(self.format_card(c) for c in cards)

    # ============================================================
    #  分隔线与标题
    # ============================================================

    @staticmethod
    def separator(char: str = "─", width: int = 60) -> str:
        return char * width

    def print_header(self, title: str) -> None:
        """打印带框的标题"""
        print(self._paint(f"\n{'═' * 60}", YELLOW, BOLD))
        print(self._paint(f"  {title}", YELLOW, BOLD))
        print(self._paint(f"{'═' * 60}\n", YELLOW, BOLD))

    # ============================================================
    #  判定结果
    # ============================================================

    def show_hand(self, label: str, hand: Hand) -> None:
        """展示一手牌的判定结果"""
        type_name = HAND_TYPE_NAME.get(hand.type, str(hand.type))
        if not hand.is_formable:
            print(f"  {label}: {self._paint('无成立牌型', DIM)}")
            return
        print(f"  {label} [{type_name}] {self.format_cards(hand.cards)}")
        print(f"      {hand.description}  {self._paint(f'(强度 {hand.strength})', DIM)}")

    def show_winners(self, labels: List[str], hands: List[Hand], winning: List[Hand]) -> None:
        """展示赢家；多手并列时为分池"""
        self.print_header("🏆 比牌结果")
        if not winning:
            print(f"  {self._paint('没有达到资格的牌', DIM)}")
            return
        names = [label for label, hand in zip(labels, hands)
                 if any(hand is w for w in winning)]
        if len(names) > 1:
            print(f"  {self._paint('平分', YELLOW)}: {', '.join(names)}")
        else:
            print(f"  胜者: {self._paint(names[0], GREEN, BOLD)}")
        for w in winning:
            print(f"      {w.description}")
        print()
