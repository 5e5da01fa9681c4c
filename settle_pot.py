"""
PotLedger command line
- Load a pot snapshot (JSON export), print each member's net balance and
  the transfers that would settle the pot.
- With --member, show one member's "you owe" and "owes you" rows.
- Optionally write an Excel report with balances and settlements.

Run:
  python settle_pot.py pot.json [--member ID] [--xlsx report.xlsx] [--json] [--verbose]

Dependencies:
  pip install openpyxl
"""
from __future__ import annotations
import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import List, Optional

from config import load_pot
from computations import (
    SettlementError,
    UnknownMemberError,
    compute_balances,
    get_member_balance,
    member_view,
    suggest_settlements,
)
from excel_export import export_excel

logger = logging.getLogger("potledger.cli")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="pot-settle", description="Settle a shared expense pot")
    ap.add_argument("pot_file", help="Pot snapshot JSON")
    ap.add_argument("--member", metavar="ID", help="Show only what member ID owes and is owed")
    ap.add_argument("--xlsx", metavar="PATH", help="Write an Excel report to PATH")
    ap.add_argument("--json", action="store_true", help="Print balances and settlements as JSON")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return ap


def _print_member_view(member_id: str, net: float, you_owe, owed_to_you, cur: str) -> None:
    print(f"{member_id}: net {net:.6f} {cur}")
    for p, amt in you_owe:
        print(f"  You owe {p}: {amt:.6f} {cur}")
    for p, amt in owed_to_you:
        print(f"  {p} owes you: {amt:.6f} {cur}")
    if not you_owe and not owed_to_you:
        print("  Nothing to settle.")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit code"""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        pot = load_pot(args.pot_file)
        balances = compute_balances(pot)
        suggestions = suggest_settlements(balances)
        if args.member is not None and args.member not in {m.id for m in pot.members}:
            raise UnknownMemberError(f"unknown member {args.member!r}")
        if args.xlsx:
            export_excel(pot, args.xlsx)
            logger.info("Wrote report to %s", args.xlsx)
    except (SettlementError, ValueError, OSError) as ex:
        print(f"pot-settle: {ex}", file=sys.stderr)
        return 2

    cur = pot.base_currency
    if args.member is not None:
        net = get_member_balance(balances, args.member)
        you_owe, owed_to_you = member_view(suggestions, args.member)
        if args.json:
            print(json.dumps({
                "member_id": args.member,
                "net": net,
                "you_owe": [{"member_id": p, "amount": a} for p, a in you_owe],
                "owed_to_you": [{"member_id": p, "amount": a} for p, a in owed_to_you],
            }, indent=2))
        else:
            _print_member_view(args.member, net, you_owe, owed_to_you, cur)
        return 0

    if args.json:
        print(json.dumps({
            "balances": [asdict(b) for b in balances],
            "settlements": [asdict(s) for s in suggestions],
        }, indent=2))
        return 0

    print(f"Balances ({cur})")
    for b in balances:
        print(f"  {b.member_id:<20} {b.net:>16.6f}")
    if suggestions:
        print("Settlements")
        for s in suggestions:
            print(f"  {s.from_member} -> {s.to_member}: {s.amount:.6f} {cur}")
    else:
        print("All settled.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
