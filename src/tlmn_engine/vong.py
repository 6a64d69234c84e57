from __future__ import annotations
from dataclasses import dataclass, replace
from typing import FrozenSet
import logging

from .rulesets import Ruleset, DefaultRuleset

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class VongState:
    num_players: int
    leader_index: int
    acted: FrozenSet[int] = frozenset()
    out: FrozenSet[int] = frozenset()      # players that finished and no longer act

def initialize_vong_state(num_players:int, leader_index:int, rules:Ruleset=DefaultRuleset) -> VongState:
    rules.validate_num_players(num_players)
    rules.validate_player_index(leader_index, num_players, "first player")
    return VongState(num_players=num_players, leader_index=leader_index, acted=frozenset({leader_index}))

def mark_player_played(state:VongState, player_index:int, rules:Ruleset=DefaultRuleset) -> VongState:
    rules.validate_player_index(player_index, state.num_players)
    if player_index in state.acted:
        return state
    logger.debug("vong: player %d acted (leader %d)", player_index, state.leader_index)
    return replace(state, acted=state.acted | {player_index})

def mark_player_out(state:VongState, player_index:int, rules:Ruleset=DefaultRuleset) -> VongState:
    rules.validate_player_index(player_index, state.num_players)
    return replace(state, out=state.out | {player_index})

def has_vong(state:VongState, player_index:int, rules:Ruleset=DefaultRuleset) -> bool:
    rules.validate_player_index(player_index, state.num_players, "current player")
    others = set(range(state.num_players)) - {player_index} - state.out
    return others <= state.acted

def reset_vong_state(state:VongState, new_leader_index:int, rules:Ruleset=DefaultRuleset) -> VongState:
    rules.validate_player_index(new_leader_index, state.num_players, "first player")
    return VongState(num_players=state.num_players, leader_index=new_leader_index,
                     acted=frozenset({new_leader_index}), out=state.out)
