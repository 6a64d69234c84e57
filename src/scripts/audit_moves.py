# columns: hand, cards, last_play, is_first_player_in_round, is_initial_round
import argparse, logging
import pandas as pd
from pathlib import Path

from tlmn_engine.cards import parse_cards
from tlmn_engine.combos import detect_combination
from tlmn_engine.errors import ValidationError
from tlmn_engine.move_validation import MoveValidationContext, is_valid_move

logger = logging.getLogger(__name__)

BAD_ROW = "BAD_ROW"

def _text(v) -> str:
    return "" if pd.isna(v) else str(v)

def _flag(v) -> bool:
    if isinstance(v, str):
        return v.strip().lower() in ("1", "true", "yes", "y")
    return bool(v) and not pd.isna(v)

def audit_row(row) -> pd.Series:
    try:
        last_cards = parse_cards(_text(row.get("last_play")))
        last = detect_combination(last_cards) if last_cards else None
        if last_cards and last is None:
            raise ValidationError("last_play is not a valid combination", {"last_play": _text(row.get("last_play"))})
        ctx = MoveValidationContext(
            cards_to_play=parse_cards(_text(row.get("cards"))),
            player_hand=parse_cards(_text(row.get("hand"))),
            last_play=last,
            is_first_player_in_round=_flag(row.get("is_first_player_in_round")),
            is_initial_round=_flag(row.get("is_initial_round")),
        )
    except ValidationError as e:
        logger.warning("row %s skipped: %s", row.name, e)
        return pd.Series({"is_valid": False, "error_code": BAD_ROW, "message": e.message, "combination": ""})

    res = is_valid_move(ctx)
    return pd.Series({
        "is_valid": res.is_valid,
        "error_code": res.error_code.value if res.error_code else "",
        "message": res.error or "",
        "combination": res.combination.kind.value if res.combination else "",
    })

def audit_frame(df:pd.DataFrame) -> pd.DataFrame:
    if df.empty:
        return df.assign(is_valid=pd.Series(dtype=bool), error_code="", message="", combination="")
    verdicts = df.apply(audit_row, axis=1)
    return pd.concat([df, verdicts], axis=1)

def main():
    p = argparse.ArgumentParser()
    p.add_argument("--csv", type=str, default="moves.csv")
    p.add_argument("--out", type=str, default="moves_audited.csv")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    df = pd.read_csv(args.csv, dtype=str, keep_default_na=True)
    out = audit_frame(df)
    out.to_csv(Path(args.out), index=False)

    summary = out["error_code"].replace("", "OK").value_counts()
    for code, n in summary.items():
        logger.info("%-28s %d", code, n)
    logger.info("Audited %d moves from %s -> %s", len(out), args.csv, args.out)

if __name__ == "__main__":
    main()
