from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple
import logging

from .errors import ValidationError
from .rulesets import Ruleset, DefaultRuleset

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class CutEntry:
    cut_player_index: int
    cutting_player_index: int
    penalty_points: int
    heo_count: int = 0
    finished_after_cut: bool = False   # chặt-and-finish: the cut is void

@dataclass(frozen=True)
class CuttingChainState:
    num_players: int
    chain: Tuple[CutEntry, ...] = ()

def initialize_cutting_chain(num_players:int, rules:Ruleset=DefaultRuleset) -> CuttingChainState:
    rules.validate_num_players(num_players)
    return CuttingChainState(num_players=num_players)

def add_cut_to_chain(state:CuttingChainState, cut_player_index:int, cutting_player_index:int,
                     penalty_points:int, heo_count:int=0, rules:Ruleset=DefaultRuleset) -> CuttingChainState:
    rules.validate_player_index(cut_player_index, state.num_players, "cut player")
    rules.validate_player_index(cutting_player_index, state.num_players, "cutting player")
    if cut_player_index == cutting_player_index:
        raise ValidationError("A player cannot cut themselves", {"playerIndex": cut_player_index})
    if penalty_points < 0:
        raise ValidationError("Penalty points must be non-negative", {"penaltyPoints": penalty_points})
    entry = CutEntry(cut_player_index, cutting_player_index, penalty_points, heo_count)
    logger.debug("chain: player %d cut player %d (%d points, %d heo), depth %d",
                 cutting_player_index, cut_player_index, penalty_points, heo_count, len(state.chain) + 1)
    return replace(state, chain=(entry,) + state.chain)

def mark_cut_player_finished(state:CuttingChainState, cut_player_index:int,
                             rules:Ruleset=DefaultRuleset) -> CuttingChainState:
    rules.validate_player_index(cut_player_index, state.num_players, "cut player")
    chain = tuple(
        replace(e, finished_after_cut=True) if e.cut_player_index == cut_player_index else e
        for e in state.chain
    )
    return replace(state, chain=chain)

def _transferred(chain:Tuple[CutEntry, ...], start:int, player_index:int) -> int:
    # penalties from cuts `player_index` made earlier in the chain, followed recursively
    total = 0
    for i in range(start, len(chain)):
        e = chain[i]
        if e.cutting_player_index == player_index and not e.finished_after_cut:
            total += e.penalty_points + _transferred(chain, i + 1, e.cut_player_index)
    return total

def get_inherited_penalty(state:CuttingChainState, player_index:int,
                          rules:Ruleset=DefaultRuleset) -> int:
    """Penalty that cutting ``player_index`` now would fold in on top of the new cut's own."""
    rules.validate_player_index(player_index, state.num_players)
    return _transferred(state.chain, 0, player_index)

def calculate_cumulative_penalties(state:CuttingChainState) -> Dict[int, int]:
    if not state.chain:
        return {}
    last = state.chain[0]
    if last.finished_after_cut:
        return {}
    total = last.penalty_points + _transferred(state.chain, 1, last.cut_player_index)
    return {last.cut_player_index: total}

def get_penalty_receiver(state:CuttingChainState) -> Optional[int]:
    if not state.chain or state.chain[0].finished_after_cut:
        return None
    return state.chain[0].cutting_player_index

def get_chain_length(state:CuttingChainState) -> int:
    return len(state.chain)

def reset_cutting_chain(state:CuttingChainState) -> CuttingChainState:
    return replace(state, chain=())
