"""Splitting a tea-shop cost across sites and labor groups."""

from collections.abc import Sequence

from site_ledger.domain.allocation import (
    LaborGroupAmounts,
    LaborGroupSplit,
    SiteAllocation,
    SiteDayUnits,
    SiteSplit,
)
from site_ledger.domain.money import round_half_up

FULL_PERCENT = 100


class InvalidSplitError(ValueError):
    """Raised when split percentages do not add up to 100."""


def allocate_by_day_units(
    total_cost: int, sites: Sequence[SiteDayUnits]
) -> list[SiteAllocation]:
    """Split a cost across a site group in proportion to day units worked.

    The last site takes whatever is left so the amounts always add up to
    ``total_cost``.
    """
    if not sites:
        return []
    total_units = sum(site.total_units for site in sites)
    if total_units == 0:
        return [
            SiteAllocation(
                site_id=site.site_id,
                total_units=site.total_units,
                percentage=0,
                amount=0,
            )
            for site in sites
        ]
    remaining = total_cost
    allocations: list[SiteAllocation] = []
    for index, site in enumerate(sites):
        share = site.total_units / total_units
        if index == len(sites) - 1:
            amount = remaining
        else:
            amount = round_half_up(share * total_cost)
        remaining -= amount
        allocations.append(
            SiteAllocation(
                site_id=site.site_id,
                total_units=site.total_units,
                percentage=round_half_up(share * FULL_PERCENT),
                amount=amount,
            )
        )
    return allocations


def split_labor_groups(total_cost: int, split: LaborGroupSplit) -> LaborGroupAmounts:
    """Split a cost between daily, contract and market laborers."""
    if split.total != FULL_PERCENT:
        raise InvalidSplitError(
            f"Labor group percentages must sum to 100% (currently {split.total}%)"
        )
    daily = round_half_up(split.daily / FULL_PERCENT * total_cost)
    contract = round_half_up(split.contract / FULL_PERCENT * total_cost)
    return LaborGroupAmounts(
        daily=daily, contract=contract, market=total_cost - daily - contract
    )


def split_across_sites(total_cost: int, primary_percent: int) -> SiteSplit:
    """Split a cost between a primary and a secondary site."""
    percent = max(0, min(FULL_PERCENT, primary_percent))
    return SiteSplit(
        primary_percent=percent,
        primary_amount=round_half_up(percent / FULL_PERCENT * total_cost),
        secondary_amount=round_half_up(
            (FULL_PERCENT - percent) / FULL_PERCENT * total_cost
        ),
    )
