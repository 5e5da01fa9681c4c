"""
Balance and settlement computations for PotLedger
"""
from __future__ import annotations
import logging
from typing import Dict, List, Tuple

from models import Balance, Pot, Suggestion
from utils import TOLERANCE, from_micro, to_micro

logger = logging.getLogger("potledger.computations")


class SettlementError(Exception):
    """Base exception for settlement engine errors."""
    pass


class UnknownMemberError(SettlementError, ValueError):
    """Raised when an expense references a member that is not in the pot."""
    pass


class DuplicateMemberError(SettlementError, ValueError):
    """Raised when a pot lists the same member id more than once."""
    pass


def _expense_label(expense, index: int) -> str:
    return repr(expense.id) if expense.id else f"#{index}"


def validate_pot(pot: Pot) -> None:
    """Reject duplicate member ids and dangling member references"""
    ids = set()
    for m in pot.members:
        if m.id in ids:
            raise DuplicateMemberError(f"duplicate member id {m.id!r}")
        ids.add(m.id)

    for i, e in enumerate(pot.expenses):
        if e.paid_by not in ids:
            raise UnknownMemberError(
                f"expense {_expense_label(e, i)}: unknown member reference {e.paid_by!r} in paid_by"
            )
        for s in e.split:
            if s.member_id not in ids:
                raise UnknownMemberError(
                    f"expense {_expense_label(e, i)}: unknown member reference {s.member_id!r} in split"
                )


def compute_summary(pot: Pot) -> Dict[str, dict]:
    """
    Compute what each member paid and owes.
    Returns dict mapping member id (sorted) -> {paid, owed, net}.

    Amounts are accumulated as integer micro-units. An expense without an
    explicit split is divided across every pot member; leftover micro-units
    go one each to the first members in id order so shares sum exactly.
    """
    validate_pot(pot)
    ids = sorted(m.id for m in pot.members)

    paid = {p: 0 for p in ids}
    owed = {p: 0 for p in ids}

    for e in pot.expenses:
        amount = to_micro(e.amount)
        paid[e.paid_by] += amount
        if e.split:
            for s in e.split:
                owed[s.member_id] += to_micro(s.amount)
        else:
            base, rem = divmod(amount, len(ids))
            for i, p in enumerate(ids):
                owed[p] += base + (1 if i < rem else 0)

    net = {p: paid[p] - owed[p] for p in ids}  # positive -> is owed; negative -> owes

    drift = sum(net.values())
    if abs(drift) > len(ids):
        logger.warning(
            "Pot %r balances do not sum to zero (off by %s); check expense splits",
            pot.id, from_micro(drift),
        )
    logger.debug("Computed balances for %d members over %d expenses", len(ids), len(pot.expenses))

    return {
        p: {
            "paid": from_micro(paid[p]),
            "owed": from_micro(owed[p]),
            "net": from_micro(net[p]),
        } for p in ids
    }


def compute_balances(pot: Pot) -> List[Balance]:
    """Net balance per member, ordered by member id"""
    summary = compute_summary(pot)
    return [Balance(member_id=p, net=s["net"]) for p, s in summary.items()]


def suggest_settlements(balances: List[Balance]) -> List[Suggestion]:
    """
    Compute transfers to settle balances.
    Greedy settlement: debtors pay creditors, both walked in member id order.
    Not guaranteed to use the fewest possible transfers.
    Returns suggestions sorted by (from, to, amount).
    """
    debtors = []
    creditors = []
    for b in balances:
        # within tolerance of zero is settled
        if b.net < -TOLERANCE:
            debtors.append([b.member_id, -to_micro(b.net)])
        elif b.net > TOLERANCE:
            creditors.append([b.member_id, to_micro(b.net)])
    debtors.sort(key=lambda x: (x[0], -x[1]))
    creditors.sort(key=lambda x: (x[0], -x[1]))

    transfers = []
    i = j = 0
    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]
        if debtor[1] <= 0:
            i += 1
            continue
        if creditor[1] <= 0:
            j += 1
            continue
        x = min(debtor[1], creditor[1])
        if x < 1:
            break
        transfers.append((debtor[0], creditor[0], x))
        debtor[1] -= x
        creditor[1] -= x

    left_debt = sum(d[1] for d in debtors)
    left_credit = sum(c[1] for c in creditors)
    if left_debt > 1 or left_credit > 1:
        logger.warning(
            "Unmatched balances after settlement: debt %s, credit %s",
            from_micro(left_debt), from_micro(left_credit),
        )

    transfers.sort()
    return [Suggestion(from_member=a, to_member=b, amount=from_micro(x)) for a, b, x in transfers]


def get_member_balance(balances: List[Balance], member_id: str) -> float:
    """Net balance of one member, 0.0 if not present"""
    for b in balances:
        if b.member_id == member_id:
            return b.net
    return 0.0


def is_pot_balanced(balances: List[Balance]) -> bool:
    """True when every member is settled"""
    return all(abs(b.net) <= TOLERANCE for b in balances)


def member_view(
    suggestions: List[Suggestion], member_id: str
) -> Tuple[List[Tuple[str, float]], List[Tuple[str, float]]]:
    """
    Split settlements into what one member pays and what they receive.
    Returns (you_owe, owed_to_you), each a list of (counterparty, amount)
    with the largest amount first.
    """
    owe: Dict[str, int] = {}
    owed: Dict[str, int] = {}
    for s in suggestions:
        if s.from_member == member_id:
            owe[s.to_member] = owe.get(s.to_member, 0) + to_micro(s.amount)
        elif s.to_member == member_id:
            owed[s.from_member] = owed.get(s.from_member, 0) + to_micro(s.amount)

    def ordered(totals):
        rows = sorted(totals.items(), key=lambda x: (-x[1], x[0]))
        return [(p, from_micro(x)) for p, x in rows]

    return ordered(owe), ordered(owed)
