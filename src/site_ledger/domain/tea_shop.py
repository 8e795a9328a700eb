"""Domain models for tea-shop entries."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from site_ledger.domain.consumption import ConsumptionPool, Reconciliation, Recipient


@dataclass(frozen=True)
class TeaShopEntryRecord:
    """Persisted tea-shop entry header for a site and day."""

    site_id: str
    date: date
    tea_total: float
    snacks_items: list[dict[str, object]]
    snacks_total: float
    total_amount: float
    working_laborer_count: int = 0
    working_laborer_total: float = 0.0
    nonworking_laborer_count: int = 0
    nonworking_laborer_total: float = 0.0
    market_laborer_count: int = 0
    market_tea_amount: float = 0.0
    market_snacks_amount: float = 0.0
    entered_by: str | None = None
    id: UUID | None = None


@dataclass(frozen=True)
class ConsumptionDetailRecord:
    """Persisted tea and snack share for a single laborer."""

    laborer_id: str
    is_working: bool
    tea_amount: float
    snacks_amount: float
    laborer_name: str = ""


@dataclass(frozen=True)
class PresentLaborer:
    """Laborer with attendance recorded for the day."""

    laborer_id: str
    name: str


@dataclass(frozen=True)
class TeaShopSession:
    """In-memory editing state for one site and day."""

    site_id: str
    date: date
    pool: ConsumptionPool
    recipients: tuple[Recipient, ...] = ()
    entry_id: UUID | None = None


@dataclass(frozen=True)
class TeaShopSummary:
    """Counts and totals per recipient kind."""

    tea_total: float
    snacks_total: float
    total: float
    working_count: int = 0
    working_total: float = 0.0
    nonworking_count: int = 0
    nonworking_total: float = 0.0
    market_count: int = 0
    market_total: float = 0.0
    market_tea_amount: float = 0.0
    market_snacks_amount: float = 0.0


@dataclass(frozen=True)
class SaveResult:
    """Outcome of saving a tea-shop session."""

    entry_id: UUID
    reconciliation: Reconciliation
    warnings: list[str] = field(default_factory=list)
