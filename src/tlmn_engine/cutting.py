from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import logging

from .combos import (
    Combo, ComboKind, compare_combinations,
    is_single_heo, is_doi_heo, is_ba_con_heo, is_three_pair_run, is_four_pair_run,
)
from .heo_tracking import SingleHeoTrackingState, get_consecutive_single_heo_count
from .penalties import calculate_multiple_heo_penalty, calculate_doi_heo_penalty, calculate_hang_penalty
from .rulesets import Ruleset, DefaultRuleset
from .vong import VongState, has_vong

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class CanCutResult:
    can_cut: bool
    reason: Optional[str] = None
    penalty_points: Optional[int] = None
    heo_count: Optional[int] = None       # single heo consumed by the cut, 0 for other cuts

def _reject(reason:str) -> CanCutResult:
    logger.debug("cut rejected: %s", reason)
    return CanCutResult(can_cut=False, reason=reason)

def _hang(target:Combo, rules:Ruleset) -> CanCutResult:
    return CanCutResult(can_cut=True, penalty_points=calculate_hang_penalty(target, rules), heo_count=0)

def _cut_single_heos(name:str, max_heos:int, heo_tracking:SingleHeoTrackingState,
                     rules:Ruleset) -> CanCutResult:
    n = get_consecutive_single_heo_count(heo_tracking)
    if n == 0:
        return _reject("No consecutive single heos tracked")
    if n > max_heos:
        if max_heos == 1:
            return _reject(f"{name} can only cut 1 single heo, but {n} are tracked")
        return _reject(f"{name} can only cut 1-{max_heos} single heos, but {n} are tracked")
    return CanCutResult(can_cut=True, penalty_points=calculate_multiple_heo_penalty(heo_tracking, rules),
                        heo_count=n)

def can_cut(cutting:Combo, target:Combo, vong_state:VongState, player_index:int,
            heo_tracking:SingleHeoTrackingState, rules:Ruleset=DefaultRuleset) -> CanCutResult:
    rules.validate_player_index(player_index, vong_state.num_players, "current player")
    if is_ba_con_heo(target):
        return _reject("3 con heo (triple of 2s) cannot be cut by any hàng")

    if cutting.kind == ComboKind.CONSECUTIVE_PAIRS:
        result = _cut_with_consecutive_pairs(cutting, target, vong_state, player_index, heo_tracking, rules)
    elif cutting.kind == ComboKind.FOUR_OF_KIND:
        result = _cut_with_four_of_kind(cutting, target, vong_state, player_index, heo_tracking, rules)
    else:
        return _reject(f"Combination type {cutting.kind.value} cannot cut other combinations")

    if result.can_cut:
        logger.info("player %d: %s cuts %s for %d points", player_index, cutting, target, result.penalty_points)
    return result

def _cut_with_consecutive_pairs(cutting:Combo, target:Combo, vong_state:VongState, player_index:int,
                                heo_tracking:SingleHeoTrackingState, rules:Ruleset) -> CanCutResult:
    three = is_three_pair_run(cutting)
    four = is_four_pair_run(cutting)
    if not (three or four):
        return _reject("Only 3 đôi thông or 4 đôi thông can cut")
    if three and not has_vong(vong_state, player_index, rules):
        return _reject("3 đôi thông requires vòng to cut")
    name = "3 đôi thông" if three else "4 đôi thông"

    if is_single_heo(target):
        return _cut_single_heos(name, rules.max_tracked_heos if three else 1, heo_tracking, rules)

    if is_doi_heo(target):
        if not four:
            return _reject("Only 4 đôi thông can cut đôi heo")
        return CanCutResult(can_cut=True, penalty_points=calculate_doi_heo_penalty(target), heo_count=0)

    if is_three_pair_run(target):
        if three and compare_combinations(cutting, target) <= 0:
            return _reject("3 đôi thông can only cut 3 đôi thông of smaller rank")
        return _hang(target, rules)

    if target.kind == ComboKind.FOUR_OF_KIND:
        if not four:
            return _reject("Only 4 đôi thông can cut tứ quý")
        return _hang(target, rules)

    if is_four_pair_run(target):
        if not four:
            return _reject("Only 4 đôi thông can cut 4 đôi thông")
        if compare_combinations(cutting, target) <= 0:
            return _reject("4 đôi thông can only cut 4 đôi thông of smaller rank")
        return _hang(target, rules)

    return _reject(f"{name} cannot cut combination type {target.kind.value}")

def _cut_with_four_of_kind(cutting:Combo, target:Combo, vong_state:VongState, player_index:int,
                           heo_tracking:SingleHeoTrackingState, rules:Ruleset) -> CanCutResult:
    if not has_vong(vong_state, player_index, rules):
        return _reject("Tứ quý requires vòng to cut")

    if is_single_heo(target):
        return _cut_single_heos("Tứ quý", rules.max_tracked_heos, heo_tracking, rules)

    if is_three_pair_run(target):
        return _hang(target, rules)

    if target.kind == ComboKind.FOUR_OF_KIND:
        if compare_combinations(cutting, target) <= 0:
            return _reject("Tứ quý can only cut tứ quý of smaller rank")
        return _hang(target, rules)

    return _reject(f"Tứ quý cannot cut combination type {target.kind.value}")
