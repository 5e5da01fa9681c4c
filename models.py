"""
Data models for PotLedger
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Member:
    """Participant in a pot"""
    id: str
    name: str = ""
    address: Optional[str] = None  # wallet address, unused by the engine


@dataclass
class SplitEntry:
    """Explicit share of one expense owed by one member"""
    member_id: str
    amount: float


@dataclass
class Expense:
    """Single payment made by one member"""
    amount: float
    paid_by: str  # member id
    split: List[SplitEntry] = field(default_factory=list)  # empty -> equal split over all members
    id: str = ""
    memo: str = ""


@dataclass
class Pot:
    """Shared ledger of expenses among a fixed set of members"""
    members: List[Member]
    expenses: List[Expense]
    id: str = ""
    name: str = ""
    base_currency: str = "DOT"


@dataclass(frozen=True)
class Balance:
    """Net position of one member: >0 is owed money, <0 owes money"""
    member_id: str
    net: float


@dataclass(frozen=True)
class Suggestion:
    """Transfer from a debtor to a creditor"""
    from_member: str
    to_member: str
    amount: float
