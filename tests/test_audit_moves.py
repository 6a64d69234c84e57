"""Move audit script tests"""
import pandas as pd

from scripts.audit_moves import audit_frame, BAD_ROW


def test_audit_frame():
    df = pd.DataFrame([
        {"hand": "3♠ 6♣ 9♦", "cards": "3♠", "last_play": None,
         "is_first_player_in_round": "true", "is_initial_round": "true"},
        {"hand": "3♠ 6♣ 9♦", "cards": "6♣", "last_play": None,
         "is_first_player_in_round": "true", "is_initial_round": "true"},
        {"hand": "4♠ 7♦ 7♥", "cards": "4♠", "last_play": "5♠",
         "is_first_player_in_round": "false", "is_initial_round": "false"},
        {"hand": "4♠ 7♦ 7♥", "cards": "7♦ 7♥", "last_play": "5♠",
         "is_first_player_in_round": "false", "is_initial_round": "false"},
        {"hand": "4♠ 7♦ 7♥", "cards": "7♦", "last_play": "5♠",
         "is_first_player_in_round": "false", "is_initial_round": "false"},
    ])
    out = audit_frame(df)
    assert list(out["is_valid"]) == [True, False, False, False, True]
    assert list(out["error_code"]) == [
        "", "MISSING_SPADE_3", "COMBINATION_TOO_LOW", "COMBINATION_TYPE_MISMATCH", "",
    ]
    assert list(out["combination"]) == ["single", "", "", "", "single"]
    assert len(out) == len(df)


def test_bad_rows_are_flagged():
    df = pd.DataFrame([
        {"hand": "3♠ 4X", "cards": "3♠", "last_play": None,
         "is_first_player_in_round": "true", "is_initial_round": "false"},
        {"hand": "3♠ 4♠", "cards": "3♠", "last_play": "5♠ 9♥",
         "is_first_player_in_round": "false", "is_initial_round": "false"},
    ])
    out = audit_frame(df)
    assert list(out["error_code"]) == [BAD_ROW, BAD_ROW]
    assert not out["is_valid"].any()
