"""Pydantic models for API requests and responses."""

from datetime import date
from typing import Annotated, Literal, assert_never
from uuid import UUID

from pydantic import BaseModel, Field

from site_ledger.domain.consumption import (
    ConsumptionPool,
    MarketGroup,
    NamedNonWorking,
    NamedWorking,
    Reconciliation,
    Recipient,
    SnackLineItem,
)
from site_ledger.domain.work_units import AlignmentStatus, TimeSpan

TIME_PATTERN = r"^(\d{1,2}:\d{2}(:\d{2})?)?$"


class SnackLineItemModel(BaseModel):
    """Snack line item payload."""

    name: str
    quantity: float = Field(ge=0)
    unit_rate: float = Field(ge=0)
    line_total: float | None = None


class PoolModel(BaseModel):
    """Tea and snack totals payload."""

    tea_total: float = Field(default=0.0, ge=0)
    snack_items: list[SnackLineItemModel] = Field(default_factory=list)
    snacks_total: float | None = None


class WorkingRecipientModel(BaseModel):
    """Laborer present on site."""

    kind: Literal["working"] = "working"
    id: str
    name: str = ""
    selected: bool = True
    tea_share: float = 0.0
    snacks_share: float = 0.0
    omit_from_tea: bool = False
    omit_from_snacks: bool = False
    snacks_breakdown: dict[str, int] = Field(default_factory=dict)


class NonWorkingRecipientModel(BaseModel):
    """Laborer added manually without attendance."""

    kind: Literal["non_working"] = "non_working"
    id: str
    name: str = ""
    tea_share: float = 0.0
    snacks_share: float = 0.0
    omit_from_tea: bool = False
    omit_from_snacks: bool = False
    snacks_breakdown: dict[str, int] = Field(default_factory=dict)


class MarketRecipientModel(BaseModel):
    """Market laborer group counted by headcount."""

    kind: Literal["market"] = "market"
    count: int = Field(default=0, ge=0)
    tea_share: float = 0.0
    snacks_share: float = 0.0
    snacks_breakdown: dict[str, int] = Field(default_factory=dict)


RecipientModel = Annotated[
    WorkingRecipientModel | NonWorkingRecipientModel | MarketRecipientModel,
    Field(discriminator="kind"),
]


class ConsumptionRequest(BaseModel):
    """Pool and recipients sent by the entry form."""

    pool: PoolModel
    recipients: list[RecipientModel] = Field(default_factory=list)


class DistributeRequest(ConsumptionRequest):
    """Distribution request for one of the two pools."""

    target: Literal["tea", "snacks"]


class ReconciliationModel(BaseModel):
    """Assigned money compared against the pool."""

    assigned_total: float
    unassigned_amount: float
    is_balanced: bool


class DistributeResponse(BaseModel):
    """Recipients after distribution."""

    eligible_count: int
    recipients: list[RecipientModel]
    reconciliation: ReconciliationModel


class TeaShopSessionModel(BaseModel):
    """Tea-shop entry editing state for a site and day."""

    site_id: str
    date: date
    entry_id: UUID | None = None
    pool: PoolModel
    recipients: list[RecipientModel]
    reconciliation: ReconciliationModel


class SaveTeaShopRequest(ConsumptionRequest):
    """Tea-shop entry submitted for saving."""

    entry_id: UUID | None = None
    entered_by: str | None = None


class SaveTeaShopResponse(BaseModel):
    """Saved tea-shop entry."""

    entry_id: UUID
    reconciliation: ReconciliationModel
    warnings: list[str]


class TimeSpanModel(BaseModel):
    """Clock times payload."""

    in_time: str | None = Field(default=None, pattern=TIME_PATTERN)
    out_time: str | None = Field(default=None, pattern=TIME_PATTERN)
    lunch_out: str | None = Field(default=None, pattern=TIME_PATTERN)
    lunch_in: str | None = Field(default=None, pattern=TIME_PATTERN)


class HoursRequest(TimeSpanModel):
    """Times to compute hours for, with an optional unit for alignment."""

    unit_value: float | None = None


class HoursResponse(BaseModel):
    """Derived hours."""

    work_hours: float
    break_hours: float
    total_hours: float
    alignment: AlignmentStatus | None = None


class WorkUnitPresetModel(BaseModel):
    """Work unit preset payload."""

    unit_value: float
    label: str
    in_time: str
    out_time: str
    lunch_out: str | None
    lunch_in: str | None
    expected_hour_range: tuple[float, float]


class WorkUnitRequest(BaseModel):
    """Work unit selection for an attendance row."""

    unit_value: float = Field(gt=0)
    actor: str | None = None


class UpdateTimesRequest(TimeSpanModel):
    """Manual time edit for an attendance row."""

    actor: str | None = None


class AttendanceRecordModel(BaseModel):
    """Attendance row with times and derived hours."""

    id: str
    laborer_id: str
    date: date
    day_units: float
    daily_rate: float
    daily_earnings: float
    in_time: str | None
    out_time: str | None
    lunch_out: str | None
    lunch_in: str | None
    work_hours: float
    break_hours: float
    total_hours: float
    alignment: AlignmentStatus


class SiteDayUnitsModel(BaseModel):
    """Day units worked at a site."""

    site_id: str
    total_units: float = Field(ge=0)


class SiteGroupAllocationRequest(BaseModel):
    """Cost to split across a site group."""

    total_cost: int = Field(ge=0)
    sites: list[SiteDayUnitsModel]


class LaborGroupSplitRequest(BaseModel):
    """Cost to split across labor groups."""

    total_cost: int = Field(ge=0)
    daily: int = Field(ge=0, le=100)
    contract: int = Field(ge=0, le=100)
    market: int = Field(ge=0, le=100)


class MultiSiteSplitRequest(BaseModel):
    """Cost to split between two sites."""

    total_cost: int = Field(ge=0)
    primary_percent: int = 50


class PreferencesModel(BaseModel):
    """Display preferences payload."""

    show_holidays: bool


def pool_to_domain(model: PoolModel) -> ConsumptionPool:
    """Build a consumption pool from its payload."""
    return ConsumptionPool(
        tea_total=model.tea_total,
        snack_line_items=tuple(
            SnackLineItem(
                name=item.name, quantity=item.quantity, unit_rate=item.unit_rate
            )
            for item in model.snack_items
        ),
    )


def pool_from_domain(pool: ConsumptionPool) -> PoolModel:
    """Build a pool payload from the domain model."""
    return PoolModel(
        tea_total=pool.tea_total,
        snack_items=[
            SnackLineItemModel(
                name=item.name,
                quantity=item.quantity,
                unit_rate=item.unit_rate,
                line_total=item.line_total,
            )
            for item in pool.snack_line_items
        ],
        snacks_total=pool.snacks_total,
    )


def recipient_to_domain(model: RecipientModel) -> Recipient:
    """Build a domain recipient from its payload."""
    payload = model.model_dump(exclude={"kind"})
    if isinstance(model, WorkingRecipientModel):
        return NamedWorking(**payload)
    if isinstance(model, NonWorkingRecipientModel):
        return NamedNonWorking(**payload)
    return MarketGroup(**payload)


def recipient_from_domain(recipient: Recipient) -> RecipientModel:
    """Build a recipient payload from the domain model."""
    match recipient:
        case NamedWorking():
            return WorkingRecipientModel(**_fields(recipient))
        case NamedNonWorking():
            return NonWorkingRecipientModel(**_fields(recipient))
        case MarketGroup():
            return MarketRecipientModel(**_fields(recipient))
        case _:
            assert_never(recipient)


def reconciliation_model(reconciliation: Reconciliation) -> ReconciliationModel:
    """Build a reconciliation payload."""
    return ReconciliationModel(
        assigned_total=reconciliation.assigned_total,
        unassigned_amount=reconciliation.unassigned_amount,
        is_balanced=reconciliation.is_balanced,
    )


def span_to_domain(model: TimeSpanModel) -> TimeSpan:
    """Build a time span from its payload, treating blanks as missing."""
    return TimeSpan(
        in_time=model.in_time or None,
        out_time=model.out_time or None,
        lunch_out=model.lunch_out or None,
        lunch_in=model.lunch_in or None,
    )


def _fields(recipient: Recipient) -> dict[str, object]:
    return {
        name: getattr(recipient, name) for name in recipient.__dataclass_fields__
    }
