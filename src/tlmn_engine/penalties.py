from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Tuple
import logging

from .cards import Card, TWO, heo_penalty_value
from .combos import Combo, ComboKind, is_single_heo, is_doi_heo
from .errors import ValidationError
from .heo_tracking import SingleHeoTrackingState, get_consecutive_single_heos
from .rulesets import Ruleset, DefaultRuleset

logger = logging.getLogger(__name__)

# ---------------- penalty values ----------------

def calculate_single_heo_penalty(heo:Card) -> int:
    if heo.rank != TWO:
        raise ValidationError("Card must be a heo (rank 2) for single heo penalty calculation",
                              {"cardRank": heo.rank_name})
    return heo_penalty_value(heo.suit)

def calculate_multiple_heo_penalty(heo_tracking:SingleHeoTrackingState, rules:Ruleset=DefaultRuleset) -> int:
    heos = get_consecutive_single_heos(heo_tracking)
    if len(heos) > rules.max_tracked_heos:
        raise ValidationError(
            f"Cannot cut more than {rules.max_tracked_heos} consecutive single heos. Found: {len(heos)}",
            {"heoCount": len(heos)},
        )
    return sum(calculate_single_heo_penalty(h) for h in heos)

def calculate_doi_heo_penalty(combo:Combo) -> int:
    if not is_doi_heo(combo):
        raise ValidationError("Combination must be đôi heo (pair of 2s) for đôi heo penalty calculation",
                              {"combinationType": combo.kind.value})
    return sum(heo_penalty_value(c.suit) for c in combo.cards)

def calculate_hang_penalty(combo:Combo, rules:Ruleset=DefaultRuleset) -> int:
    if combo.kind == ComboKind.FOUR_OF_KIND:
        return rules.hang_penalty
    if combo.kind == ComboKind.CONSECUTIVE_PAIRS:
        if combo.length not in (3, 4):
            raise ValidationError("Consecutive pairs must be 3 or 4 pairs to be considered hàng",
                                  {"pairCount": combo.length})
        return rules.hang_penalty
    raise ValidationError(
        "Combination must be a hàng (3 đôi thông, tứ quý, or 4 đôi thông) for hàng penalty calculation",
        {"combinationType": combo.kind.value},
    )

def calculate_chat_penalty(cutting:Combo, target:Combo, heo_tracking:SingleHeoTrackingState,
                           rules:Ruleset=DefaultRuleset) -> int:
    """Penalty the cut player owes for ``cutting`` landing on ``target``."""
    if is_single_heo(target):
        return calculate_multiple_heo_penalty(heo_tracking, rules)
    if is_doi_heo(target):
        return calculate_doi_heo_penalty(target)
    if target.kind in (ComboKind.CONSECUTIVE_PAIRS, ComboKind.FOUR_OF_KIND):
        return calculate_hang_penalty(target, rules)
    raise ValidationError("Invalid target combination for cutting penalty calculation",
                          {"targetType": target.kind.value, "cuttingType": cutting.kind.value})

# ---------------- ledger ----------------

@dataclass(frozen=True)
class PlayerPenaltyState:
    penalties_paid: int = 0
    penalties_received: int = 0

    @property
    def net(self) -> int:
        return self.penalties_received - self.penalties_paid

@dataclass(frozen=True)
class PenaltyTrackingState:
    num_players: int
    players: Tuple[PlayerPenaltyState, ...]

def initialize_penalty_tracking(num_players:int, rules:Ruleset=DefaultRuleset) -> PenaltyTrackingState:
    rules.validate_num_players(num_players)
    return PenaltyTrackingState(num_players=num_players,
                                players=tuple(PlayerPenaltyState() for _ in range(num_players)))

def _check_points(**points:int) -> None:
    if any(p < 0 for p in points.values()):
        raise ValidationError("Penalty points must be non-negative", points)

def _add(state:PenaltyTrackingState, player_index:int, paid:int=0, received:int=0) -> PenaltyTrackingState:
    players = list(state.players)
    p = players[player_index]
    players[player_index] = PlayerPenaltyState(p.penalties_paid + paid, p.penalties_received + received)
    return replace(state, players=tuple(players))

def record_penalty_payment(state:PenaltyTrackingState, player_index:int, points:int,
                           rules:Ruleset=DefaultRuleset) -> PenaltyTrackingState:
    rules.validate_player_index(player_index, state.num_players)
    _check_points(penaltyPoints=points)
    return _add(state, player_index, paid=points)

def record_penalty_receipt(state:PenaltyTrackingState, player_index:int, points:int,
                           rules:Ruleset=DefaultRuleset) -> PenaltyTrackingState:
    rules.validate_player_index(player_index, state.num_players)
    _check_points(penaltyPoints=points)
    return _add(state, player_index, received=points)

def record_cutting_with_transfer(state:PenaltyTrackingState, payer_index:int, receiver_index:int,
                                 base_penalty:int, inherited_penalty:int=0,
                                 rules:Ruleset=DefaultRuleset) -> PenaltyTrackingState:
    """Chặt chồng: the payer also covers whatever penalty the cut play was already carrying."""
    rules.validate_player_index(payer_index, state.num_players, "cut player")
    rules.validate_player_index(receiver_index, state.num_players, "cutting player")
    if payer_index == receiver_index:
        raise ValidationError("A player cannot cut themselves", {"playerIndex": payer_index})
    _check_points(penaltyPoints=base_penalty, transferredPenalties=inherited_penalty)

    total = base_penalty + inherited_penalty
    logger.info("penalty transfer: player %d pays %d (%d + %d inherited) to player %d",
                payer_index, total, base_penalty, inherited_penalty, receiver_index)
    state = _add(state, payer_index, paid=total)
    return _add(state, receiver_index, received=total)

def get_player_penalties_paid(state:PenaltyTrackingState, player_index:int,
                              rules:Ruleset=DefaultRuleset) -> int:
    rules.validate_player_index(player_index, state.num_players)
    return state.players[player_index].penalties_paid

def get_player_penalties_received(state:PenaltyTrackingState, player_index:int,
                                  rules:Ruleset=DefaultRuleset) -> int:
    rules.validate_player_index(player_index, state.num_players)
    return state.players[player_index].penalties_received

def get_player_net_penalty_score(state:PenaltyTrackingState, player_index:int,
                                 rules:Ruleset=DefaultRuleset) -> int:
    rules.validate_player_index(player_index, state.num_players)
    return state.players[player_index].net
