"""Combination detection and comparison tests"""
import pytest

from tlmn_engine.cards import parse_card, parse_cards, RANK_TO_IDX
from tlmn_engine.combos import (
    ComboKind, detect_combination, detect_straight, detect_consecutive_pairs, detect_four_of_kind,
    compare_combinations, can_beat, is_single_heo, is_doi_heo, is_ba_con_heo,
)
from tlmn_engine.errors import ValidationError
from tlmn_engine.rulesets import Ruleset


def combo(text):
    return detect_combination(parse_cards(text))


class TestDetectCombination:

    @pytest.mark.parametrize(("text", "kind"), [
        ("3♠", ComboKind.SINGLE),
        ("7♠ 7♥", ComboKind.PAIR),
        ("2♣ 2♦", ComboKind.PAIR),
        ("9♠ 9♣ 9♥", ComboKind.TRIPLE),
        ("3♠ 4♦ 5♥", ComboKind.STRAIGHT),
        ("3♠ 4♠ 5♠ 6♠ 7♠ 8♠ 9♠ 10♠ J♠ Q♠ K♠ A♠", ComboKind.STRAIGHT),
        ("5♠ 5♥ 6♣ 6♦ 7♠ 7♣", ComboKind.CONSECUTIVE_PAIRS),
        ("3♠ 3♣ 4♠ 4♣ 5♠ 5♣ 6♠ 6♣ 7♠ 7♣ 8♠ 8♣", ComboKind.CONSECUTIVE_PAIRS),
        ("J♠ J♣ J♦ J♥", ComboKind.FOUR_OF_KIND),
    ])
    def test_kinds(self, text, kind):
        assert combo(text).kind == kind

    @pytest.mark.parametrize("text", [
        "3♠ 4♠",                     # not a pair
        "3♠ 3♣ 4♦",                  # not a triple or straight
        "3♠ 4♠ 6♠",                  # gap
        "Q♠ K♠ A♠ 2♠",               # 2 in straight
        "K♠ K♣ A♠ A♣ 2♠ 2♣",         # 2 in consecutive pairs
        "2♠ 2♣ 2♦ 2♥",               # four heo
        "5♠ 5♣ 5♦ 6♠",               # mixed four never falls back
        "5♠ 5♣ 6♠ 6♣",               # two pairs only
        "5♠ 5♣ 5♦ 6♠ 6♣ 7♠",         # uneven pairs
        "5♠ 5♣ 6♠ 6♣ 8♠ 8♣",         # gap in pairs
    ])
    def test_rejected(self, text):
        assert combo(text) is None

    def test_empty(self):
        assert detect_combination([]) is None

    @pytest.mark.parametrize("text", ["3♠ 3♠", "5♠ 5♠ 5♠ 5♠", "3♠ 4♠ 4♠"])
    def test_repeated_card(self, text):
        assert combo(text) is None

    def test_seven_pair_run_rejected(self):
        assert combo("3♠ 3♣ 4♠ 4♣ 5♠ 5♣ 6♠ 6♣ 7♠ 7♣ 8♠ 8♣ 9♠ 9♣") is None

    def test_order_independent_and_deterministic(self):
        a = combo("7♥ 5♠ 6♣")
        b = combo("5♠ 6♣ 7♥")
        assert a == b == combo("7♥ 5♠ 6♣")
        assert a.highest_card == parse_card("7♥")

    def test_straight_length_limits(self):
        assert detect_straight(parse_cards("3♠ 4♠")) is None
        assert detect_straight(parse_cards("3♠ 4♠ 5♠ 6♠"), Ruleset(straight_max_len=3)) is None

    def test_consecutive_pairs_rank_is_top_pair_high_card(self):
        c = detect_consecutive_pairs(parse_cards("5♠ 5♥ 6♣ 6♦ 7♠ 7♣"))
        assert c.length == 3
        assert c.highest_card == parse_card("7♣")
        assert c.rank == parse_card("7♣").value

    def test_four_of_kind_rank_is_rank_index(self):
        c = detect_four_of_kind(parse_cards("J♠ J♣ J♦ J♥"))
        assert c.rank == RANK_TO_IDX["J"]
        assert c.highest_card == parse_card("J♥")

    def test_pair_rank_uses_high_suit(self):
        assert combo("7♠ 7♥").rank > combo("7♣ 7♦").rank


class TestCompare:

    def test_singles(self):
        assert compare_combinations(combo("5♠"), combo("4♥")) == 1
        assert compare_combinations(combo("5♠"), combo("5♣")) == -1
        assert compare_combinations(combo("5♠"), combo("5♠")) == 0

    def test_longer_straight_wins(self):
        assert can_beat(combo("3♠ 4♠ 5♠ 6♠"), combo("Q♥ K♥ A♥"))
        assert not can_beat(combo("Q♥ K♥ A♥"), combo("3♠ 4♠ 5♠ 6♠"))

    def test_same_length_straight_by_high_card(self):
        assert can_beat(combo("4♠ 5♠ 6♥"), combo("4♣ 5♣ 6♦"))
        assert not can_beat(combo("4♠ 5♠ 6♣"), combo("4♣ 5♣ 6♦"))

    def test_longer_consecutive_pairs_win(self):
        four = combo("3♠ 3♣ 4♠ 4♣ 5♠ 5♣ 6♠ 6♣")
        three = combo("Q♠ Q♣ K♠ K♣ A♠ A♣")
        assert compare_combinations(four, three) == 1

    def test_four_of_kind(self):
        assert can_beat(combo("9♠ 9♣ 9♦ 9♥"), combo("8♠ 8♣ 8♦ 8♥"))

    def test_kind_mismatch_raises(self):
        with pytest.raises(ValidationError) as exc:
            compare_combinations(combo("5♠"), combo("5♣ 5♦"))
        assert exc.value.metadata == {"combo1Type": "single", "combo2Type": "pair"}


class TestHeoClassifiers:

    def test_single_heo(self):
        assert is_single_heo(combo("2♦"))
        assert not is_single_heo(combo("A♦"))
        assert not is_single_heo(combo("2♦ 2♥"))

    def test_doi_heo(self):
        assert is_doi_heo(combo("2♠ 2♥"))
        assert not is_doi_heo(combo("A♠ A♥"))

    def test_ba_con_heo(self):
        assert is_ba_con_heo(combo("2♠ 2♣ 2♥"))
        assert not is_ba_con_heo(combo("K♠ K♣ K♥"))
