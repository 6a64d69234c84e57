from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence
import logging

from .cards import Card, THREE_SPADES
from .combos import Combo, detect_combination, compare_combinations
from .rulesets import Ruleset, DefaultRuleset

logger = logging.getLogger(__name__)

class MoveErrorCode(str, Enum):
    NO_CARDS_SELECTED = "NO_CARDS_SELECTED"
    CARDS_NOT_IN_HAND = "CARDS_NOT_IN_HAND"
    INVALID_COMBINATION = "INVALID_COMBINATION"
    MISSING_SPADE_3 = "MISSING_SPADE_3"
    INVALID_STATE = "INVALID_STATE"
    COMBINATION_TYPE_MISMATCH = "COMBINATION_TYPE_MISMATCH"
    COMBINATION_TOO_LOW = "COMBINATION_TOO_LOW"

ERROR_MESSAGES = {
    MoveErrorCode.NO_CARDS_SELECTED: "No cards selected to play",
    MoveErrorCode.CARDS_NOT_IN_HAND: "Some selected cards are not in player hand",
    MoveErrorCode.INVALID_COMBINATION: "Selected cards do not form a valid combination",
    MoveErrorCode.MISSING_SPADE_3: "First play in initial round must include ♠3 (3 Spades)",
    MoveErrorCode.INVALID_STATE: "No last play found but not first player in round",
    MoveErrorCode.COMBINATION_TYPE_MISMATCH: "Combination type mismatch. Expected {expected}, got {actual}",
    MoveErrorCode.COMBINATION_TOO_LOW: "Combination does not beat last play. Must be higher value than the last play",
}

@dataclass(frozen=True)
class MoveValidationContext:
    cards_to_play: Sequence[Card]
    player_hand: Sequence[Card]
    last_play: Optional[Combo]          # None when the trick is fresh
    is_first_player_in_round: bool
    is_initial_round: bool              # very first trick of the game

@dataclass(frozen=True)
class MoveValidationResult:
    is_valid: bool
    error_code: Optional[MoveErrorCode] = None
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    combination: Optional[Combo] = None   # the detected combination when valid

def _card_list(cards:Sequence[Card]) -> List[str]:
    return [str(c) for c in cards]

def _fail(code:MoveErrorCode, metadata:Optional[Dict[str, Any]]=None, **fmt) -> MoveValidationResult:
    msg = ERROR_MESSAGES[code].format(**fmt)
    logger.debug("move rejected: %s (%s)", code.value, msg)
    return MoveValidationResult(is_valid=False, error_code=code, error=msg, metadata=metadata or {})

def _missing_cards(cards_to_play:Sequence[Card], hand:Sequence[Card]) -> List[Card]:
    available = Counter(hand)
    missing = []
    for c in cards_to_play:
        if available[c] > 0:
            available[c] -= 1
        else:
            missing.append(c)
    return missing

def is_valid_move(ctx:MoveValidationContext, rules:Ruleset=DefaultRuleset) -> MoveValidationResult:
    """Check a proposed play. Checks run in order and stop at the first failure:
    cards selected, cards held, valid combination, 3♠ on the opening lead, then
    same kind as and higher than the last play.
    """
    cards = list(ctx.cards_to_play or ())
    if not cards:
        return _fail(MoveErrorCode.NO_CARDS_SELECTED)

    missing = _missing_cards(cards, ctx.player_hand)
    if missing:
        return _fail(MoveErrorCode.CARDS_NOT_IN_HAND, {
            "missingCards": _card_list(missing),
            "playerHandSize": len(ctx.player_hand),
            "cardsToPlaySize": len(cards),
        })

    combo = detect_combination(cards, rules)
    if combo is None:
        return _fail(MoveErrorCode.INVALID_COMBINATION, {"cards": _card_list(cards)})

    if ctx.is_first_player_in_round:
        if (ctx.is_initial_round and rules.first_trick_must_contain_three_spades
                and THREE_SPADES not in cards):
            return _fail(MoveErrorCode.MISSING_SPADE_3, {
                "isInitialRound": True,
                "combinationType": combo.kind.value,
            })
        return MoveValidationResult(is_valid=True, combination=combo)

    last = ctx.last_play
    if last is None:
        return _fail(MoveErrorCode.INVALID_STATE, {"isFirstPlayerInRound": ctx.is_first_player_in_round})

    if combo.kind != last.kind:
        return _fail(MoveErrorCode.COMBINATION_TYPE_MISMATCH, {
            "expectedType": last.kind.value,
            "actualType": combo.kind.value,
            "lastPlayCards": _card_list(last.cards),
            "playedCards": _card_list(cards),
        }, expected=last.kind.value, actual=combo.kind.value)

    comparison = compare_combinations(combo, last)
    if comparison <= 0:
        return _fail(MoveErrorCode.COMBINATION_TOO_LOW, {
            "combinationType": combo.kind.value,
            "combinationRank": combo.rank,
            "lastPlayRank": last.rank,
            "comparisonResult": comparison,
            "lastPlayCards": _card_list(last.cards),
            "playedCards": _card_list(cards),
        })

    return MoveValidationResult(is_valid=True, combination=combo)
