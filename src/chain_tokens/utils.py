"""Amount conversion, address normalisation and async helpers."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable
from decimal import Decimal
from typing import Any, TypeVar

from web3 import Web3
from web3.types import ChecksumAddress

from .exceptions import ValidationError

T = TypeVar("T")


def to_raw_amount(value: float | Decimal | int, decimals: int) -> int:
    """Scale a human amount into the integer units a token contract expects."""
    amount = value if isinstance(value, Decimal) else Decimal(str(value))

    if not amount.is_finite():
        raise ValidationError("Amount must be a finite number", field="amount", value=value)

    if amount < 0:
        raise ValidationError("Amount cannot be negative", field="amount", value=value)

    multiplier = Decimal(10**decimals)
    return int(amount * multiplier)


def from_raw_amount(raw_value: int, decimals: int) -> Decimal:
    """Convert integer token units to a Decimal amount."""
    divisor = Decimal(10**decimals)
    return Decimal(raw_value) / divisor


def normalise_address(value: Any, field: str = "address") -> ChecksumAddress:
    """Return the checksum form of an address, raising ValidationError if malformed."""
    try:
        return Web3.to_checksum_address(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(
            f"Invalid address for {field}", field=field, value=value, details={"error": str(exc)}
        ) from exc


async def join_all(aws: Iterable[Awaitable[T]]) -> list[T]:
    """Await independent operations concurrently and return their results in order.

    The first failure wins: once any operation raises, the still-running ones
    are cancelled and that exception propagates. No partial results are
    returned.
    """

    tasks = [asyncio.ensure_future(aw) for aw in aws]
    if not tasks:
        return []

    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    except asyncio.CancelledError:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    if pending:
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

    failures = [task.exception() for task in tasks if task in done and not task.cancelled()]
    for error in failures:
        if error is not None:
            raise error

    return [task.result() for task in tasks]
