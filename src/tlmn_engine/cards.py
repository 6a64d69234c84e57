from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .errors import ValidationError

# Rank order in TLMN: 3 < 4 < ... < K < A < 2
RANKS = ["3","4","5","6","7","8","9","10","J","Q","K","A","2"]
RANK_TO_IDX = {r:i for i,r in enumerate(RANKS)}
RANK_TO_IDX["T"] = RANK_TO_IDX["10"]

# Suit order used for tie-breaking: ♠ < ♣ < ♦ < ♥  (hearts highest)
SUITS = ["S","C","D","H"]
SUIT_SYMBOLS = ["♠","♣","♦","♥"]
SUIT_TO_IDX = {s:i for i,s in enumerate(SUITS)}
SUIT_TO_IDX.update({s:i for i,s in enumerate(SUIT_SYMBOLS)})

TWO = RANK_TO_IDX["2"]
SPADES, CLUBS, DIAMONDS, HEARTS = range(4)

def card_id(rank_idx:int, suit_idx:int) -> int:
    return rank_idx*4 + suit_idx

def decode_card(c:int) -> Tuple[int,int]:
    return c//4, c%4

def card_str(c:int) -> str:
    r,s = decode_card(c)
    return f"{RANKS[r]}{SUIT_SYMBOLS[s]}"


@dataclass(frozen=True, order=True)
class Card:
    """A playing card. Ordering and equality follow ``value`` (rank first, then suit)."""
    value: int

    def __post_init__(self):
        if not isinstance(self.value, int) or not 0 <= self.value < 52:
            raise ValidationError(f"Invalid card id: {self.value}", {"value": self.value})

    @classmethod
    def of(cls, rank:int, suit:int) -> "Card":
        if not 0 <= rank < 13:
            raise ValidationError(f"Invalid card rank: {rank}", {"rank": rank, "validRanks": RANKS})
        if not 0 <= suit < 4:
            raise ValidationError(f"Invalid card suit: {suit}", {"suit": suit, "validSuits": SUITS})
        return cls(card_id(rank, suit))

    @classmethod
    def from_id(cls, c:int) -> "Card":
        return cls(c)

    @property
    def id(self) -> int:
        return self.value

    @property
    def rank(self) -> int:
        return self.value // 4

    @property
    def suit(self) -> int:
        return self.value % 4

    @property
    def rank_name(self) -> str:
        return RANKS[self.rank]

    @property
    def suit_symbol(self) -> str:
        return SUIT_SYMBOLS[self.suit]

    @property
    def is_heo(self) -> bool:
        return self.rank == TWO

    @property
    def points(self) -> int:
        return card_points(self)

    def __str__(self) -> str:
        return card_str(self.value)

    def __repr__(self) -> str:
        return f"Card({card_str(self.value)})"


def parse_card(text:str) -> Card:
    """Parse ``"10♥"``, ``"TH"``, ``"3s"`` or ``"2♦"`` into a :class:`Card`."""
    t = text.strip()
    if len(t) < 2:
        raise ValidationError(f"Invalid card text: {text!r}", {"text": text})
    rank_txt, suit_txt = t[:-1].upper(), t[-1].upper()
    if rank_txt not in RANK_TO_IDX:
        raise ValidationError(f"Invalid card rank: {rank_txt}", {"rank": rank_txt, "validRanks": RANKS})
    if suit_txt not in SUIT_TO_IDX:
        raise ValidationError(f"Invalid card suit: {suit_txt}", {"suit": suit_txt, "validSuits": SUIT_SYMBOLS})
    return Card.of(RANK_TO_IDX[rank_txt], SUIT_TO_IDX[suit_txt])

def parse_cards(text:str) -> List[Card]:
    return [parse_card(tok) for tok in text.replace(",", " ").split()]

def format_cards(cards:Iterable[Card]) -> str:
    return " ".join(str(c) for c in cards)

def full_deck() -> List[Card]:
    return [Card(i) for i in range(52)]

def heo_penalty_value(suit:int) -> int:
    """Penalty weight of a heo: ♠/♣ are worth 1, ♦/♥ are worth 2."""
    if suit in (SPADES, CLUBS):
        return 1
    if suit in (DIAMONDS, HEARTS):
        return 2
    raise ValidationError(f"Invalid suit for heo penalty: {suit}", {"suit": suit, "validSuits": SUITS})

def card_points(card:Card) -> int:
    # Only heo carry a suit-dependent weight; every other card counts 1.
    if card.is_heo:
        return heo_penalty_value(card.suit)
    return 1

THREE_SPADES = Card.of(RANK_TO_IDX["3"], SUIT_TO_IDX["S"])
