"""Append-only transaction log helpers."""
from __future__ import annotations

import uuid
from typing import Iterable, List, Optional

from .models import Transaction

TRANSACTION_TYPES = ("buy", "sell", "dividend")


def new_transaction(type: str, symbol: str, quantity: float, price: float, date: str,
                    notes: str = "", cost_basis: Optional[float] = None,
                    tx_id: Optional[str] = None) -> Transaction:
    if type not in TRANSACTION_TYPES:
        raise ValueError(f"Transaction type must be one of {TRANSACTION_TYPES}, got {type!r}")
    if quantity < 0 or price < 0:
        raise ValueError("Transaction quantity and price must be non-negative")
    if cost_basis is not None and cost_basis < 0:
        raise ValueError("Transaction cost basis must be non-negative")
    return Transaction(
        id=tx_id or uuid.uuid4().hex,
        type=type,
        symbol=symbol,
        quantity=quantity,
        price=price,
        date=date,
        notes=notes,
        cost_basis=cost_basis,
    )


def add_transaction(log: Iterable[Transaction], tx: Transaction) -> List[Transaction]:
    """Return a new log with ``tx`` first (newest first)."""
    return [tx, *log]


def delete_transaction(log: Iterable[Transaction], tx_id: str) -> List[Transaction]:
    return [tx for tx in log if tx.id != tx_id]


def transactions_for_symbol(log: Iterable[Transaction], symbol: str) -> List[Transaction]:
    return [tx for tx in log if tx.symbol == symbol]


def transactions_in_year(log: Iterable[Transaction], year: int) -> List[Transaction]:
    prefix = str(year)
    return [tx for tx in log if (tx.date or "").startswith(prefix)]


__all__ = [
    "TRANSACTION_TYPES",
    "add_transaction",
    "delete_transaction",
    "new_transaction",
    "transactions_for_symbol",
    "transactions_in_year",
]
