from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from django.utils import timezone as djtz

from ..models import AMOUNT_DECIMAL_PLACES, AMOUNT_MAX_DIGITS
from ..exceptions import MappingError
from .stages import deal_stage_to_status

CONTACT_PROPERTIES = [
    "email",
    "firstname",
    "lastname",
    "company",
    "phone",
    "member_portal_access",
    "onboarding_progress",
    "onboarding_step",
    "tool_reservations_count",
    "growth_plan_active",
    "cost_estimates_count",
    "shop_orders_count",
    "last_portal_activity",
    "portal_engagement_score",
]

DEAL_PROPERTIES = ["dealname", "amount", "dealstage", "closedate", "createdate", "project_type"]

DEFAULT_COMPANY = "unknown"
DEFAULT_DEAL_TITLE = "Untitled Project"
DEFAULT_DEAL_TYPE = "Construction"
MAX_AMOUNT = Decimal(10) ** (AMOUNT_MAX_DIGITS - AMOUNT_DECIMAL_PLACES)


def to_dt(ts: Any) -> Optional[datetime]:
    """ISO-8601 strings or epoch milliseconds (HubSpot uses both) to an aware datetime."""
    if ts is None or ts == "":
        return None
    if isinstance(ts, datetime):
        return ts if djtz.is_aware(ts) else djtz.make_aware(ts, timezone.utc)
    text = str(ts).strip()
    if text.isdigit():
        try:
            return datetime.fromtimestamp(int(text) / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    try:
        value = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    return value if djtz.is_aware(value) else djtz.make_aware(value, timezone.utc)


def to_decimal(value: Any) -> Optional[Decimal]:
    """Amount that fits the estimated_value column, else None."""
    if value is None or value == "":
        return None
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite() or abs(amount) >= MAX_AMOUNT:
        return None
    amount = amount.quantize(Decimal(1).scaleb(-AMOUNT_DECIMAL_PLACES))
    # rounding can carry into one more integer digit
    return amount if abs(amount) < MAX_AMOUNT else None


def _text(properties: Dict[str, Any], name: str) -> str:
    return str(properties.get(name) or "").strip()


@dataclass(frozen=True)
class ContactRecord:
    email: str
    name: str = ""
    phone: Optional[str] = None
    company: str = DEFAULT_COMPANY
    last_active: Optional[datetime] = None
    is_active: bool = True

    def as_fields(self) -> Dict[str, Any]:
        fields = asdict(self)
        fields.pop("email")
        return fields


@dataclass(frozen=True)
class OpportunityRecord:
    title: str = DEFAULT_DEAL_TITLE
    description: str = ""
    type: str = DEFAULT_DEAL_TYPE
    status: str = "Active"
    date_posted: Optional[datetime] = None
    deadline: Optional[datetime] = None
    estimated_value: Optional[Decimal] = None

    def as_fields(self) -> Dict[str, Any]:
        return asdict(self)


def contact_properties_to_record(properties: Dict[str, Any], now: Optional[datetime] = None) -> ContactRecord:
    props = properties or {}
    email = _text(props, "email").lower()
    if not email:
        raise MappingError("HubSpot contact has no email; cannot key the cache row")

    name = f"{_text(props, 'firstname')} {_text(props, 'lastname')}".strip()
    access = props.get("member_portal_access")

    return ContactRecord(
        email=email,
        name=name,
        phone=_text(props, "phone") or None,
        company=_text(props, "company") or DEFAULT_COMPANY,
        last_active=to_dt(props.get("last_portal_activity")) or now or djtz.now(),
        is_active=True if access is None or access == "" else str(access).strip().lower() == "true",
    )


def deal_properties_to_record(properties: Dict[str, Any], occurred_at: Optional[datetime] = None) -> OpportunityRecord:
    props = properties or {}
    title = _text(props, "dealname") or DEFAULT_DEAL_TITLE

    return OpportunityRecord(
        title=title,
        description=f"HubSpot Deal: {title}",
        type=_text(props, "project_type") or DEFAULT_DEAL_TYPE,
        status=str(deal_stage_to_status(props.get("dealstage"))),
        date_posted=to_dt(props.get("createdate")) or occurred_at or djtz.now(),
        deadline=to_dt(props.get("closedate")),
        estimated_value=to_decimal(props.get("amount")),
    )
