"""Tea and snack cost distribution across recipients."""

from collections.abc import Callable, Iterable
from dataclasses import replace
from typing import assert_never

from site_ledger.domain.consumption import (
    ConsumptionPool,
    MarketGroup,
    NamedNonWorking,
    NamedWorking,
    Reconciliation,
    Recipient,
)
from site_ledger.domain.money import round_half_up, round_money
from site_ledger.domain.tea_shop import TeaShopSummary

RECONCILE_TOLERANCE = 0.02


def eligible_tea_recipient_count(recipients: Iterable[Recipient]) -> int:
    """Return how many people share the tea total."""
    return sum(_tea_headcount(recipient) for recipient in recipients)


def eligible_snacks_recipient_count(recipients: Iterable[Recipient]) -> int:
    """Return how many people share the snacks total."""
    return sum(_snacks_headcount(recipient) for recipient in recipients)


def distribute_tea(
    pool: ConsumptionPool, recipients: Iterable[Recipient]
) -> list[Recipient]:
    """Split the tea total evenly across eligible recipients.

    Recipients that are deselected or omitted keep their previous share.
    When nobody is eligible or the tea total is zero the input is returned
    unchanged.
    """
    current = list(recipients)
    count = eligible_tea_recipient_count(current)
    if count <= 0 or pool.tea_total <= 0:
        return current
    per_person = round_money(pool.tea_total / count)
    return [
        _assign(recipient, "tea_share", per_person, _tea_headcount)
        for recipient in current
    ]


def distribute_snacks(
    pool: ConsumptionPool, recipients: Iterable[Recipient]
) -> list[Recipient]:
    """Split the snacks total evenly across eligible recipients.

    Each eligible recipient also gets a per-person item breakdown. Items
    whose per-person quantity rounds to zero are left out of it.
    """
    current = list(recipients)
    count = eligible_snacks_recipient_count(current)
    if count <= 0 or pool.snacks_total <= 0:
        return current
    per_person = round_money(pool.snacks_total / count)
    breakdown = snack_breakdown(pool, count)
    distributed: list[Recipient] = []
    for recipient in current:
        updated = _assign(recipient, "snacks_share", per_person, _snacks_headcount)
        if updated is not recipient:
            updated = replace(updated, snacks_breakdown=dict(breakdown))
        distributed.append(updated)
    return distributed


def snack_breakdown(pool: ConsumptionPool, count: int) -> dict[str, int]:
    """Return per-person quantities of each snack item."""
    if count <= 0:
        return {}
    breakdown: dict[str, int] = {}
    for item in pool.snack_line_items:
        per_person_qty = round_half_up(item.quantity / count)
        if per_person_qty == 0:
            continue
        breakdown[item.name] = per_person_qty
    return breakdown


def reconcile(
    pool: ConsumptionPool,
    recipients: Iterable[Recipient],
    tolerance: float = RECONCILE_TOLERANCE,
) -> Reconciliation:
    """Compare the assigned shares against the pool total.

    A positive ``unassigned_amount`` is money not yet assigned, a negative
    one means the shares exceed the pool. Differences smaller than the
    tolerance are reported as zero.
    """
    assigned_total = round_money(
        sum(recipient.tea_share + recipient.snacks_share for recipient in recipients)
    )
    raw_difference = round_money(pool.total - assigned_total)
    if abs(raw_difference) < tolerance:
        return Reconciliation(assigned_total=assigned_total, unassigned_amount=0.0)
    return Reconciliation(
        assigned_total=assigned_total, unassigned_amount=raw_difference
    )


def summarize(pool: ConsumptionPool, recipients: Iterable[Recipient]) -> TeaShopSummary:
    """Return counts and share totals per recipient kind."""
    working_count = 0
    working_total = 0.0
    nonworking_count = 0
    nonworking_total = 0.0
    market_count = 0
    market_tea = 0.0
    market_snacks = 0.0
    for recipient in recipients:
        match recipient:
            case NamedWorking():
                if recipient.selected:
                    working_count += 1
                    working_total += recipient.tea_share + recipient.snacks_share
            case NamedNonWorking():
                nonworking_count += 1
                nonworking_total += recipient.tea_share + recipient.snacks_share
            case MarketGroup():
                market_count += recipient.count
                market_tea += recipient.tea_share
                market_snacks += recipient.snacks_share
            case _:
                assert_never(recipient)
    return TeaShopSummary(
        tea_total=pool.tea_total,
        snacks_total=pool.snacks_total,
        total=pool.total,
        working_count=working_count,
        working_total=round_money(working_total),
        nonworking_count=nonworking_count,
        nonworking_total=round_money(nonworking_total),
        market_count=market_count,
        market_total=round_money(market_tea + market_snacks),
        market_tea_amount=round_money(market_tea),
        market_snacks_amount=round_money(market_snacks),
    )


def _tea_headcount(recipient: Recipient) -> int:
    match recipient:
        case NamedWorking():
            return int(recipient.selected and not recipient.omit_from_tea)
        case NamedNonWorking():
            return int(not recipient.omit_from_tea)
        case MarketGroup():
            return recipient.count
        case _:
            assert_never(recipient)


def _snacks_headcount(recipient: Recipient) -> int:
    match recipient:
        case NamedWorking():
            return int(recipient.selected and not recipient.omit_from_snacks)
        case NamedNonWorking():
            return int(not recipient.omit_from_snacks)
        case MarketGroup():
            return recipient.count
        case _:
            assert_never(recipient)


def _assign(
    recipient: Recipient,
    share_field: str,
    per_person: float,
    headcount: Callable[[Recipient], int],
) -> Recipient:
    people = headcount(recipient)
    if people == 0:
        return recipient
    return replace(recipient, **{share_field: round_money(per_person * people)})
