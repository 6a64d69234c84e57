from __future__ import annotations
from dataclasses import dataclass

from .errors import ValidationError

@dataclass
class Ruleset:
    min_players: int = 2
    max_players: int = 4
    # Runs never contain a 2
    straight_min_len: int = 3
    straight_max_len: int = 12
    pair_run_min_len: int = 3          # in pairs
    pair_run_max_len: int = 6
    # At most this many consecutive single heo can be cut at once
    max_tracked_heos: int = 4
    # Flat penalty for cutting hàng (3 đôi thông, tứ quý, 4 đôi thông)
    hang_penalty: int = 4
    # First trick of the game must contain 3♠
    first_trick_must_contain_three_spades: bool = True

    def validate_num_players(self, num_players:int) -> None:
        if num_players < self.min_players or num_players > self.max_players:
            raise ValidationError(
                f"Invalid number of players: {num_players}. "
                f"Must be between {self.min_players} and {self.max_players}.",
                {"numPlayers": num_players},
            )

    def validate_player_index(self, player_index:int, num_players:int, what:str="player") -> None:
        if player_index < 0 or player_index >= num_players:
            raise ValidationError(
                f"Invalid {what} index: {player_index}. Must be between 0 and {num_players - 1}.",
                {"playerIndex": player_index, "numPlayers": num_players},
            )

DefaultRuleset = Ruleset()
