"""
Pot snapshot loading and conversion for PotLedger
"""
from __future__ import annotations
import json
import logging
import math

from models import Expense, Member, Pot, SplitEntry

logger = logging.getLogger("potledger.config")


def _require(d: dict, key: str, what: str):
    try:
        return d[key]
    except KeyError:
        raise ValueError(f"{what} is missing required key {key!r}") from None


def _object(value, what: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"{what} is not an object")
    return value


def _list(d: dict, key: str, what: str) -> list:
    value = d.get(key) or []
    if not isinstance(value, list):
        raise ValueError(f"{what} {key!r} is not a list")
    return value


def _amount(value, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"{what} has non-numeric amount {value!r}")
    try:
        amount = float(value)
    except ValueError:
        raise ValueError(f"{what} has non-numeric amount {value!r}") from None
    if not math.isfinite(amount):
        raise ValueError(f"{what} has non-finite amount {value!r}")
    return amount


def dict_to_pot(d: dict) -> Pot:
    """Convert a pot snapshot dictionary (camelCase export format) to a Pot"""
    members = []
    for i, m in enumerate(_list(d, "members", "pot")):
        m = _object(m, f"member #{i}")
        members.append(Member(
            id=str(_require(m, "id", f"member #{i}")),
            name=m.get("name", ""),
            address=m.get("address"),
        ))

    expenses = []
    for i, e in enumerate(_list(d, "expenses", "pot")):
        e = _object(e, f"expense #{i}")
        what = f"expense {e.get('id', '#%d' % i)!s}"
        split = []
        for j, s in enumerate(_list(e, "split", what)):
            s = _object(s, f"{what} split #{j}")
            split.append(SplitEntry(
                member_id=str(_require(s, "memberId", f"{what} split")),
                amount=_amount(_require(s, "amount", f"{what} split"), f"{what} split"),
            ))
        expenses.append(Expense(
            id=str(e.get("id", "")),
            amount=_amount(_require(e, "amount", what), what),
            paid_by=str(_require(e, "paidBy", what)),
            split=split,
            # legacy exports used "description"
            memo=e.get("memo", e.get("description", "")) or "",
        ))

    return Pot(
        id=str(d.get("id", "")),
        name=d.get("name", ""),
        base_currency=d.get("baseCurrency", "DOT"),
        members=members,
        expenses=expenses,
    )


def pot_to_dict(pot: Pot) -> dict:
    """Convert Pot object to dictionary for JSON serialization"""
    return {
        "id": pot.id,
        "name": pot.name,
        "baseCurrency": pot.base_currency,
        "members": [
            {"id": m.id, "name": m.name, **({"address": m.address} if m.address else {})}
            for m in pot.members
        ],
        "expenses": [
            {
                "id": e.id,
                "amount": e.amount,
                "paidBy": e.paid_by,
                "memo": e.memo,
                "split": [{"memberId": s.member_id, "amount": s.amount} for s in e.split],
            }
            for e in pot.expenses
        ],
    }


def load_pot(path: str) -> Pot:
    """Load a pot snapshot from a JSON file"""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object at top level")
    pot = dict_to_pot(data)
    logger.debug("Loaded pot %r from %s (%d members, %d expenses)",
                 pot.id, path, len(pot.members), len(pot.expenses))
    return pot
