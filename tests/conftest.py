import json

import pytest

from models import Expense, Member, Pot, SplitEntry


def _expense(amount, paid_by, split=None, **kwargs):
    entries = [SplitEntry(member_id=m, amount=a) for m, a in (split or [])]
    return Expense(amount=amount, paid_by=paid_by, split=entries, **kwargs)


@pytest.fixture
def make_pot():
    """Return a factory building a Pot from member ids and expense tuples."""
    def _make(members, expenses=(), **kwargs):
        return Pot(
            members=[Member(id=m, name=m.title()) for m in members],
            expenses=[_expense(*e) if isinstance(e, tuple) else e for e in expenses],
            **kwargs,
        )
    return _make


@pytest.fixture
def pot_snapshot():
    """A pot in the JSON export format."""
    return {
        "id": "pot-1",
        "name": "Lisbon trip",
        "baseCurrency": "DOT",
        "members": [
            {"id": "alice", "name": "Alice", "address": "15oF4uVJwmo4TdGW7VfQxNLavjCXviqxT9S1MgbjMNHr6Sp5"},
            {"id": "bob", "name": "Bob"},
            {"id": "carol", "name": "Carol"},
        ],
        "expenses": [
            {"id": "e1", "amount": 30, "paidBy": "alice", "memo": "Dinner"},
            {"id": "e2", "amount": 12.5, "paidBy": "bob", "description": "Taxi",
             "split": [{"memberId": "bob", "amount": 6.25}, {"memberId": "carol", "amount": 6.25}]},
        ],
    }


@pytest.fixture
def pot_file(tmp_path, pot_snapshot):
    """Write the snapshot to a JSON file and return its path."""
    path = tmp_path / "pot.json"
    path.write_text(json.dumps(pot_snapshot), encoding="utf-8")
    return str(path)
