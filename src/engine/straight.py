"""顺子判定 - 缺口计数、A-5 顺子、百搭补位

这里的函数都作用在 hand_detector 的单次判定状态上：
通过 check_cards() 取参与判定的牌，通过 claim_wild()/adopt() 指定百搭。
"""

from typing import List, Optional, Tuple

from .card import ACE_RANK, LOW_ACE_RANK, VALUES, Card, sort_cards


def with_low_aces(cards: List[Card]) -> List[Card]:
    """A 同时以最小牌身份参与顺子（追加 rank 0 的副本）"""
    extended = list(cards) + [c.as_low_ace() for c in cards if c.resolved_value == "A"]
    return sort_cards(extended)


def longest_run(cards: List[Card], length: int, qualify: int, spare_wilds: int,
                top: int = len(VALUES)) -> List[Card]:
    """
    缺口计数：窗口 [high-length, high-1] 从高到低滑动，
    每个窗口内每个点数取一张，返回牌数最多的窗口。
    牌数相同时保留先找到的（更高的）窗口。
    剩余百搭足以补齐 qualify 张时提前结束。
    """
    best: List[Card] = []
    for high in range(top, 0, -1):
        run: List[Card] = []
        for card in cards:
            if card.rank >= high:
                continue
            if high - card.rank > length:
                break
            if run and run[-1].rank == card.rank:
                continue
            run.append(card)
        if len(run) > len(best):
            best = run
        if qualify - len(best) <= spare_wilds:
            break
    return best


def _is_open_ended(run: List[Card]) -> bool:
    """顺子内部没有缺口"""
    return run[0].rank - run[-1].rank == len(run) - 1


def _wild_rank_for(run: List[Card]) -> Optional[int]:
    """下一张百搭应补的点数：内部缺口补最高的一个，否则向上延伸，到 A 则向下"""
    if not run:
        return ACE_RANK
    if _is_open_ended(run):
        if run[0].rank < ACE_RANK:
            return run[0].rank + 1
        if run[-1].rank > LOW_ACE_RANK:
            return run[-1].rank - 1
        return None
    for upper, lower in zip(run, run[1:]):
        if upper.rank - lower.rank > 1:
            return upper.rank - 1
    return None


def find_wheel(attempt) -> Optional[List[Card]]:
    """
    A-2-3-4-5 式最小顺子：从 qualify-1 到 0 每个点数都要有牌或百搭，
    缺一张即整体失败（不返回部分结果）。
    成功时低位 A 改回 A 的身份，比较时按最大点数计。
    """
    cards = attempt.check_cards()
    wheel: List[Card] = []
    for rank in range(attempt.rules.qualify_length - 1, -1, -1):
        match = next((c for c in cards if c.rank == rank), None)
        if match is None:
            if not attempt.unresolved_wilds():
                attempt.reset_wilds()
                return None
            match = attempt.claim_wild(rank)
        wheel.append(match)

    wheel = [c.resolve(ACE_RANK) if c.rank == LOW_ACE_RANK else c for c in wheel]
    attempt.adopt(wheel)
    wheel = sort_cards(wheel)

    # 多余的百搭当 A 补到整手牌
    while attempt.unresolved_wilds() and len(wheel) < attempt.rules.cards_per_hand:
        wheel.append(attempt.claim_wild(ACE_RANK))
    return wheel


def find_straight(attempt) -> Optional[Tuple[List[Card], bool]]:
    """
    找最好的顺子，返回 (顺子牌, 是否 A-5 顺子) 或 None。
    只返回组成顺子的牌，踢脚牌由调用方补。
    """
    rules = attempt.rules
    if rules.wheel_enabled:
        wheel = find_wheel(attempt)
        if wheel:
            return wheel, True

    run = longest_run(attempt.check_cards(), rules.qualify_length,
                      rules.qualify_length, len(attempt.unresolved_wilds()))

    for _ in range(len(attempt.unresolved_wilds())):
        rank = _wild_rank_for(run)
        if rank is None:
            continue
        run = sort_cards(run + [attempt.claim_wild(rank)])

    if len(run) < rules.qualify_length:
        attempt.reset_wilds()
        return None
    return run[:rules.cards_per_hand], False
