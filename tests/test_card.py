"""牌面解析单元测试"""

import pytest
from src.engine.card import (
    ACE_RANK, LOW_ACE_RANK, WILD_RANK, Card, CardParseError, parse_cards, sort_cards,
)


class TestParse:
    """记号解析"""

    def test_basic(self):
        card = Card.parse("Ah")
        assert (card.value, card.suit, card.rank) == ("A", "h", ACE_RANK)
        assert not card.wild

    def test_ten_both_notations(self):
        assert Card.parse("Td").rank == 9
        assert Card.parse("10d") == Card.parse("Td")
        assert str(Card.parse("Td")) == "10d"

    def test_case_normalized(self):
        card = Card.parse("aH")
        assert card.value == "A"
        assert card.suit == "h"

    def test_round_trip(self):
        for text, expected in [("Ah", "Ah"), ("Td", "10d"), ("10c", "10c"),
                               ("9S", "9s"), ("2c", "2c")]:
            assert str(Card.parse(text)) == expected

    @pytest.mark.parametrize("text", ["Ax", "1h", "Zs", "Ahh", "A", ""])
    def test_rejects_bad_notation(self, text):
        with pytest.raises(CardParseError):
            Card.parse(text)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            Card.parse("Qx")

    def test_wild(self):
        card = Card.parse("Os", wild_value="O")
        assert card.wild
        assert card.rank == WILD_RANK
        assert not card.is_resolved
        assert str(card) == "Os"

    def test_wild_face_only_with_wild_rule(self):
        assert Card.parse("2h", wild_value="2").wild
        assert not Card.parse("2h").wild
        with pytest.raises(CardParseError):
            Card.parse("Oh")


class TestResolve:
    """百搭指定与 A 的低位副本"""

    def test_resolve_and_reset(self):
        wild = Card.parse("Os", wild_value="O", slot=3)
        ace = wild.resolve(ACE_RANK)
        assert ace.rank == ACE_RANK
        assert str(ace) == "As"
        assert ace.slot == 3
        assert wild.rank == WILD_RANK

        back = ace.reset()
        assert back.rank == WILD_RANK
        assert str(back) == "Os"

    def test_reset_natural_card_is_noop(self):
        card = Card.parse("Kd")
        assert card.reset() is card

    def test_low_ace(self):
        ace = Card.parse("Ah", slot=1)
        low = ace.as_low_ace()
        assert low.rank == LOW_ACE_RANK
        assert low.slot == ace.slot
        assert str(low) == "Ah"


class TestCardList:

    def test_parse_string_assigns_slots(self):
        cards = parse_cards("Ah Kd 7c")
        assert [c.slot for c in cards] == [0, 1, 2]
        assert [str(c) for c in cards] == ["Ah", "Kd", "7c"]

    def test_card_objects_follow_new_wild_value(self):
        cards = parse_cards([Card.parse("2h"), "9d"], wild_value="2")
        assert cards[0].wild
        assert not cards[1].wild

    def test_sort_is_descending_and_stable(self):
        cards = sort_cards(parse_cards("7c Ah 7d Os 2s", wild_value="O"))
        assert [str(c) for c in cards] == ["Ah", "7c", "7d", "2s", "Os"]
