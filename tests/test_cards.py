"""Card model tests"""
import pytest

from tlmn_engine.cards import (
    Card, RANK_TO_IDX, SUIT_TO_IDX, THREE_SPADES,
    parse_card, parse_cards, card_points, heo_penalty_value, full_deck,
)
from tlmn_engine.errors import ValidationError


class TestCardValue:

    def test_lowest_and_highest(self):
        assert THREE_SPADES.value == 0
        assert parse_card("2♥").value == 51

    def test_rank_dominates_suit(self):
        assert parse_card("4♠") > parse_card("3♥")
        assert parse_card("2♠") > parse_card("A♥")

    def test_suit_order(self):
        s, c, d, h = parse_cards("7♠ 7♣ 7♦ 7♥")
        assert s < c < d < h

    def test_equal_by_value(self):
        assert parse_card("10♥") == Card.of(RANK_TO_IDX["10"], SUIT_TO_IDX["H"])
        assert parse_card("TH") == parse_card("10♥")
        assert len({parse_card("QD"), parse_card("Q♦")}) == 1

    def test_from_id_roundtrip_properties(self):
        c = Card.from_id(4 * RANK_TO_IDX["K"] + 2)
        assert c.rank_name == "K"
        assert c.suit_symbol == "♦"
        assert str(c) == "K♦"

    def test_full_deck(self):
        deck = full_deck()
        assert len(deck) == 52
        assert deck == sorted(deck, key=lambda c: (c.rank, c.suit))


class TestParsing:

    @pytest.mark.parametrize("text", ["", "1♠", "3X", "Z♥", "♠"])
    def test_invalid(self, text):
        with pytest.raises(ValidationError):
            parse_card(text)

    def test_lowercase_letters(self):
        assert parse_card("3s") == THREE_SPADES

    def test_parse_many(self):
        assert [str(c) for c in parse_cards("3♠, 4♣ 5D")] == ["3♠", "4♣", "5♦"]

    def test_invalid_id(self):
        with pytest.raises(ValidationError):
            Card(52)


class TestPoints:

    @pytest.mark.parametrize(("text", "expected"), [
        ("2♠", 1), ("2♣", 1), ("2♦", 2), ("2♥", 2),
    ])
    def test_heo_points(self, text, expected):
        c = parse_card(text)
        assert card_points(c) == expected
        assert c.points == expected
        assert heo_penalty_value(c.suit) == expected

    def test_other_cards_worth_one(self):
        assert all(card_points(c) == 1 for c in full_deck() if not c.is_heo)

    def test_bad_suit(self):
        with pytest.raises(ValidationError):
            heo_penalty_value(7)
