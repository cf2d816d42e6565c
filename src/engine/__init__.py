# 牌型判定引擎
from .card import Card, CardParseError, DuplicateCardError, parse_cards, sort_cards
from .hand_type import HandType, Hand
from .rules import RuleSet, WildPolicy, WheelPolicy, GAME_RULES, get_rules
from .hand_detector import classify
from .showdown import compare, qualifies_high, winners
