from __future__ import annotations
from itertools import combinations
from typing import List, Optional, Sequence, Tuple
import numpy as np

from .cards import Card, TWO
from .combos import (
    Combo, ComboKind, detect_single, detect_pair, detect_triple, detect_four_of_kind,
    detect_straight, detect_consecutive_pairs,
)
from .cutting import CanCutResult, can_cut
from .encoding import rank_suit_matrix
from .heo_tracking import SingleHeoTrackingState
from .move_validation import MoveValidationContext, is_valid_move
from .rulesets import Ruleset, DefaultRuleset
from .vong import VongState

def _suits(m:np.ndarray, r:int) -> List[int]:
    return [int(s) for s in np.flatnonzero(m[r])]

def enumerate_sets(hand:Sequence[Card]) -> List[Combo]:
    """Every single, pair and triple, plus every four of a kind."""
    m = rank_suit_matrix(hand)
    buf: List[Combo] = [detect_single([c]) for c in sorted(set(hand))]
    for r in range(13):
        owned = [Card.of(r, s) for s in _suits(m, r)]
        buf += [detect_pair(list(cs)) for cs in combinations(owned, 2)]
        buf += [detect_triple(list(cs)) for cs in combinations(owned, 3)]
        if len(owned) == 4 and r != TWO:
            buf.append(detect_four_of_kind(owned))
    return buf

def _canonical_run(m:np.ndarray, start:int, L:int, per_rank:int) -> Optional[List[Card]]:
    # lowest suits everywhere except the top rank, which takes its highest suits
    seq: List[Card] = []
    for r in range(start, start+L):
        suits = _suits(m, r)
        if len(suits) < per_rank:
            return None
        chosen = suits[-per_rank:] if r == start+L-1 else suits[:per_rank]
        seq.extend(Card.of(r, s) for s in chosen)
    return seq

def enumerate_runs(hand:Sequence[Card], rules:Ruleset=DefaultRuleset) -> List[Combo]:
    """Strongest canonical straight and consecutive-pairs run for every (start, length)."""
    m = rank_suit_matrix(hand)
    top = TWO - 1   # runs stop at A
    buf: List[Combo] = []
    for L in range(rules.straight_min_len, min(rules.straight_max_len, top+1) + 1):
        for start in range(0, top-L+2):
            seq = _canonical_run(m, start, L, 1)
            if seq: buf.append(detect_straight(seq, rules))
    for L in range(rules.pair_run_min_len, min(rules.pair_run_max_len, top+1) + 1):
        for start in range(0, top-L+2):
            seq = _canonical_run(m, start, L, 2)
            if seq: buf.append(detect_consecutive_pairs(seq, rules))
    return buf

def enumerate_combinations(hand:Sequence[Card], rules:Ruleset=DefaultRuleset) -> List[Combo]:
    return enumerate_sets(hand) + enumerate_runs(hand, rules)

def playable_combinations(hand:Sequence[Card], last_play:Optional[Combo], is_first_player_in_round:bool,
                          is_initial_round:bool=False, rules:Ruleset=DefaultRuleset) -> List[Combo]:
    out = []
    for combo in enumerate_combinations(hand, rules):
        ctx = MoveValidationContext(
            cards_to_play=combo.cards, player_hand=hand, last_play=last_play,
            is_first_player_in_round=is_first_player_in_round, is_initial_round=is_initial_round,
        )
        if is_valid_move(ctx, rules).is_valid:
            out.append(combo)
    return out

def cutting_options(hand:Sequence[Card], target:Combo, vong_state:VongState, player_index:int,
                    heo_tracking:SingleHeoTrackingState,
                    rules:Ruleset=DefaultRuleset) -> List[Tuple[Combo, CanCutResult]]:
    out = []
    for combo in enumerate_combinations(hand, rules):
        if combo.kind not in (ComboKind.CONSECUTIVE_PAIRS, ComboKind.FOUR_OF_KIND):
            continue
        res = can_cut(combo, target, vong_state, player_index, heo_tracking, rules)
        if res.can_cut:
            out.append((combo, res))
    return out
