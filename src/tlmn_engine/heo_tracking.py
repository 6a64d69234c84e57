from __future__ import annotations
from dataclasses import dataclass, replace
from typing import List, Tuple
import logging

from .cards import Card
from .combos import Combo, is_single_heo
from .rulesets import Ruleset, DefaultRuleset

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class SingleHeoTrackingState:
    num_players: int
    consecutive_single_heos: Tuple[Card, ...] = ()

def initialize_single_heo_tracking(num_players:int, rules:Ruleset=DefaultRuleset) -> SingleHeoTrackingState:
    rules.validate_num_players(num_players)
    return SingleHeoTrackingState(num_players=num_players)

def record_play(state:SingleHeoTrackingState, combo:Combo) -> SingleHeoTrackingState:
    """Append a single heo; any other play (đôi heo and 3 con heo included) clears the run."""
    if is_single_heo(combo):
        return replace(state, consecutive_single_heos=state.consecutive_single_heos + (combo.cards[0],))
    if state.consecutive_single_heos:
        logger.debug("heo run of %d broken by %s", len(state.consecutive_single_heos), combo)
    return replace(state, consecutive_single_heos=())

def get_consecutive_single_heo_count(state:SingleHeoTrackingState) -> int:
    return len(state.consecutive_single_heos)

def get_consecutive_single_heos(state:SingleHeoTrackingState) -> List[Card]:
    return list(state.consecutive_single_heos)

def reset_single_heo_tracking(state:SingleHeoTrackingState) -> SingleHeoTrackingState:
    return replace(state, consecutive_single_heos=())
