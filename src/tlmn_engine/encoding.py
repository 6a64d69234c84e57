from __future__ import annotations
from typing import Iterable, List
import numpy as np

from .cards import Card

# hand_52: index = card id (rank-major then suit), same layout as Card.value

def hand_mask(cards:Iterable[Card]) -> np.ndarray:
    h = np.zeros(52, dtype=np.bool_)
    for c in cards: h[c.value] = True
    return h

def cards_from_mask(mask:np.ndarray) -> List[Card]:
    return [Card(int(i)) for i in np.flatnonzero(mask)]

def rank_suit_matrix(cards:Iterable[Card]) -> np.ndarray:
    """(13, 4) bool matrix: row = rank index (3..2), column = suit index (♠♣♦♥)."""
    return hand_mask(cards).reshape(13, 4)
