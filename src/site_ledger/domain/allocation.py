"""Domain models for splitting costs across sites and labor groups."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SiteDayUnits:
    """Day units worked at one site of a site group."""

    site_id: str
    total_units: float


@dataclass(frozen=True)
class SiteAllocation:
    """Share of a cost assigned to a site."""

    site_id: str
    total_units: float
    percentage: int
    amount: int


@dataclass(frozen=True)
class LaborGroupSplit:
    """Percentages of a cost borne by each labor group."""

    daily: int
    contract: int
    market: int

    @property
    def total(self) -> int:
        return self.daily + self.contract + self.market


@dataclass(frozen=True)
class LaborGroupAmounts:
    """Cost amounts per labor group."""

    daily: int
    contract: int
    market: int


@dataclass(frozen=True)
class SiteSplit:
    """A cost split between a primary and a secondary site."""

    primary_percent: int
    primary_amount: int
    secondary_amount: int
