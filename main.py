"""扑克牌型判定 - 命令行入口"""

import argparse
import logging
import sys
from typing import List, Optional

from src.engine.card import CardParseError, DuplicateCardError
from src.engine.hand_detector import classify
from src.engine.rules import GAME_RULES, get_rules
from src.engine.showdown import winners
from src.ui.renderer import TerminalRenderer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="判定扑克牌型并比较大小")
    parser.add_argument("hands", nargs="+",
                        help="每手牌用引号括起、空格分隔，如 \"Ah Kh Qh Jh Th\"")
    parser.add_argument("--game", default="standard", choices=sorted(GAME_RULES),
                        help="玩法 (默认 standard)")
    parser.add_argument("--verbose", action="store_true", help="输出调试日志")
    parser.add_argument("--no-color", action="store_true", help="不使用 ANSI 颜色")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """命令行入口"""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    rules = get_rules(args.game)
    renderer = TerminalRenderer(color=not args.no_color)

    try:
        hands = [classify(text, rules) for text in args.hands]
    except (CardParseError, DuplicateCardError) as e:
        parser.error(str(e))

    labels = [f"#{i + 1}" for i in range(len(hands))]
    renderer.print_header(f"🃏 牌型判定 ({rules.name})")
    for label, hand in zip(labels, hands):
        renderer.show_hand(label, hand)

    if len(hands) > 1 or rules.lowest_qualifying_hand:
        renderer.show_winners(labels, hands, winners(hands))
    return 0


if __name__ == "__main__":
    sys.exit(main())
