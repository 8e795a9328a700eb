"""Domain models for tea and snack consumption."""

from dataclasses import dataclass, field, replace
from typing import Self

from site_ledger.domain.money import round_money


@dataclass(frozen=True)
class SnackLineItem:
    """A snack bought from the tea shop, priced per unit."""

    name: str
    quantity: float
    unit_rate: float
    line_total: float = field(init=False)

    def __post_init__(self) -> None:
        if self.quantity < 0 or self.unit_rate < 0:
            raise ValueError(f"Snack item {self.name!r} has a negative amount")
        object.__setattr__(
            self, "line_total", round_money(self.quantity * self.unit_rate)
        )


@dataclass(frozen=True)
class ConsumptionPool:
    """Money spent at the tea shop for one site and day."""

    tea_total: float = 0.0
    snack_line_items: tuple[SnackLineItem, ...] = ()

    def __post_init__(self) -> None:
        if self.tea_total < 0:
            raise ValueError("Tea total cannot be negative")
        object.__setattr__(self, "snack_line_items", tuple(self.snack_line_items))

    @property
    def snacks_total(self) -> float:
        """Total of all snack line items."""
        return round_money(sum(item.line_total for item in self.snack_line_items))

    @property
    def total(self) -> float:
        return round_money(self.tea_total + self.snacks_total)


@dataclass(frozen=True)
class NamedWorking:
    """A laborer present on site that day."""

    id: str
    name: str = ""
    selected: bool = True
    tea_share: float = 0.0
    snacks_share: float = 0.0
    omit_from_tea: bool = False
    omit_from_snacks: bool = False
    snacks_breakdown: dict[str, int] = field(default_factory=dict)

    def with_shares(
        self, tea_share: float | None = None, snacks_share: float | None = None
    ) -> Self:
        """Return a copy with manually edited shares."""
        return replace(self, **_share_changes(tea_share, snacks_share))


@dataclass(frozen=True)
class NamedNonWorking:
    """A laborer who consumed tea or snacks without working that day."""

    id: str
    name: str = ""
    tea_share: float = 0.0
    snacks_share: float = 0.0
    omit_from_tea: bool = False
    omit_from_snacks: bool = False
    snacks_breakdown: dict[str, int] = field(default_factory=dict)

    def with_shares(
        self, tea_share: float | None = None, snacks_share: float | None = None
    ) -> Self:
        """Return a copy with manually edited shares."""
        return replace(self, **_share_changes(tea_share, snacks_share))


@dataclass(frozen=True)
class MarketGroup:
    """Anonymous market laborers counted by headcount only.

    Shares are the aggregate for the whole group, while ``count`` people
    are added to the distribution denominator.
    """

    count: int = 0
    tea_share: float = 0.0
    snacks_share: float = 0.0
    snacks_breakdown: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError("Market laborer count cannot be negative")

    def with_shares(
        self, tea_share: float | None = None, snacks_share: float | None = None
    ) -> Self:
        """Return a copy with manually edited shares."""
        return replace(self, **_share_changes(tea_share, snacks_share))


Recipient = NamedWorking | NamedNonWorking | MarketGroup


@dataclass(frozen=True)
class Reconciliation:
    """Assigned money compared against the pool."""

    assigned_total: float
    unassigned_amount: float

    @property
    def is_balanced(self) -> bool:
        return self.unassigned_amount == 0


def _share_changes(
    tea_share: float | None, snacks_share: float | None
) -> dict[str, float]:
    changes: dict[str, float] = {}
    if tea_share is not None:
        changes["tea_share"] = round_money(tea_share)
    if snacks_share is not None:
        changes["snacks_share"] = round_money(snacks_share)
    return changes
