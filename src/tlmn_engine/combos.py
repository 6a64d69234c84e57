from __future__ import annotations
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .cards import Card, TWO, format_cards
from .errors import ValidationError
from .rulesets import Ruleset, DefaultRuleset

class ComboKind(str, Enum):
    SINGLE = "single"
    PAIR = "pair"
    TRIPLE = "triple"
    STRAIGHT = "straight"
    CONSECUTIVE_PAIRS = "consecutive_pairs"
    FOUR_OF_KIND = "four_of_kind"

RUN_KINDS = (ComboKind.STRAIGHT, ComboKind.CONSECUTIVE_PAIRS)

@dataclass(frozen=True)
class Combo:
    kind: ComboKind
    cards: Tuple[Card, ...]          # sorted by value
    rank: int                        # comparison key within the same kind
    highest_card: Card
    length: int = 1                  # cards for straights, pairs for consecutive pairs

    def __str__(self) -> str:
        return f"{self.kind.value.upper()}[{format_cards(self.cards)}]"

def _sorted(cards:Sequence[Card]) -> Tuple[Card, ...]:
    return tuple(sorted(cards))

def _same_rank(cards:Sequence[Card]) -> bool:
    return len({c.rank for c in cards}) == 1

def _consecutive(ranks:Sequence[int]) -> bool:
    return all(ranks[i]+1 == ranks[i+1] for i in range(len(ranks)-1))

def detect_single(cards:Sequence[Card]) -> Optional[Combo]:
    if len(cards) != 1:
        return None
    c = cards[0]
    return Combo(kind=ComboKind.SINGLE, cards=(c,), rank=c.value, highest_card=c)

def detect_pair(cards:Sequence[Card]) -> Optional[Combo]:
    if len(cards) != 2 or not _same_rank(cards):
        return None
    cs = _sorted(cards)
    return Combo(kind=ComboKind.PAIR, cards=cs, rank=cs[-1].value, highest_card=cs[-1])

def detect_triple(cards:Sequence[Card]) -> Optional[Combo]:
    if len(cards) != 3 or not _same_rank(cards):
        return None
    cs = _sorted(cards)
    return Combo(kind=ComboKind.TRIPLE, cards=cs, rank=cs[-1].value, highest_card=cs[-1])

def detect_straight(cards:Sequence[Card], rules:Ruleset=DefaultRuleset) -> Optional[Combo]:
    if len(cards) < rules.straight_min_len or len(cards) > rules.straight_max_len:
        return None
    cs = _sorted(cards)
    if any(c.rank == TWO for c in cs):
        return None
    if not _consecutive([c.rank for c in cs]):
        return None
    hi = cs[-1]
    return Combo(kind=ComboKind.STRAIGHT, cards=cs, rank=hi.value, highest_card=hi, length=len(cs))

def detect_consecutive_pairs(cards:Sequence[Card], rules:Ruleset=DefaultRuleset) -> Optional[Combo]:
    if len(cards) % 2 != 0:
        return None
    n_pairs = len(cards) // 2
    if n_pairs < rules.pair_run_min_len or n_pairs > rules.pair_run_max_len:
        return None
    by_rank: Dict[int, List[Card]] = defaultdict(list)
    for c in cards:
        by_rank[c.rank].append(c)
    if TWO in by_rank:
        return None
    if any(len(cs) != 2 for cs in by_rank.values()):
        return None
    ranks = sorted(by_rank)
    if not _consecutive(ranks):
        return None
    hi = max(by_rank[ranks[-1]])
    return Combo(kind=ComboKind.CONSECUTIVE_PAIRS, cards=_sorted(cards), rank=hi.value,
                 highest_card=hi, length=n_pairs)

def detect_four_of_kind(cards:Sequence[Card]) -> Optional[Combo]:
    if len(cards) != 4 or not _same_rank(cards):
        return None
    # Four 2s is an instant win, not a playable combination
    if cards[0].rank == TWO:
        return None
    cs = _sorted(cards)
    return Combo(kind=ComboKind.FOUR_OF_KIND, cards=cs, rank=cs[0].rank, highest_card=cs[-1])

def detect_combination(cards:Sequence[Card], rules:Ruleset=DefaultRuleset) -> Optional[Combo]:
    """Classify ``cards``, trying the most specific kinds first. ``None`` if nothing matches."""
    cards = list(cards)
    if not cards or len(set(cards)) != len(cards):
        return None
    return (detect_four_of_kind(cards)
            or detect_consecutive_pairs(cards, rules)
            or detect_straight(cards, rules)
            or detect_triple(cards)
            or detect_pair(cards)
            or detect_single(cards))

def _cmp(a:int, b:int) -> int:
    return (a > b) - (a < b)

def compare_combinations(a:Combo, b:Combo) -> int:
    """1 if ``a`` is higher, -1 if lower, 0 if equal. Both must be the same kind."""
    if a.kind != b.kind:
        raise ValidationError("Cannot compare combinations of different types",
                              {"combo1Type": a.kind.value, "combo2Type": b.kind.value})
    if a.kind in RUN_KINDS:
        # longer run wins regardless of rank
        by_len = _cmp(a.length, b.length)
        if by_len:
            return by_len
    return _cmp(a.rank, b.rank)

def can_beat(new:Combo, last:Combo) -> bool:
    return compare_combinations(new, last) > 0

# Heo classifiers
def is_single_heo(c:Combo) -> bool:
    return c.kind == ComboKind.SINGLE and c.cards[0].rank == TWO

def is_doi_heo(c:Combo) -> bool:
    return c.kind == ComboKind.PAIR and all(x.rank == TWO for x in c.cards)

def is_ba_con_heo(c:Combo) -> bool:
    return c.kind == ComboKind.TRIPLE and all(x.rank == TWO for x in c.cards)

def is_three_pair_run(c:Combo) -> bool:
    return c.kind == ComboKind.CONSECUTIVE_PAIRS and c.length == 3

def is_four_pair_run(c:Combo) -> bool:
    return c.kind == ComboKind.CONSECUTIVE_PAIRS and c.length == 4
