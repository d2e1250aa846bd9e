"""
Routing of HubSpot webhook batches to per-object handlers.

A delivery may carry many events. Each one is handled on its own: an unknown
subscription type is skipped, a handler exception is logged and recorded, and
the remaining events still run. The caller always gets a BatchResult back, so
the delivery can be acknowledged and HubSpot does not redeliver the batch.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..exceptions import MalformedPayload
from .mappers import to_dt
from .pipelines import sync_contact, sync_deal

logger = logging.getLogger(__name__)

HANDLED = "handled"
SKIPPED = "skipped"
FAILED = "failed"

CUSTOM_OBJECTS = (
    "tools",
    "tool_reservations",
    "growth_plans",
    "cost_estimates",
    "camera_estimates",
    "shop_orders",
)


@dataclass(frozen=True)
class WebhookEvent:
    event_id: Optional[int]
    subscription_type: str
    object_id: Optional[int]
    subscription_id: Optional[int] = None
    portal_id: Optional[int] = None
    app_id: Optional[int] = None
    occurred_at: Optional[datetime] = None
    attempt_number: int = 0
    change_source: str = ""
    change_flag: str = ""
    property_name: Optional[str] = None
    property_value: Optional[str] = None
    # set when the batch item could not be read as an event
    parse_error: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "WebhookEvent":
        if not isinstance(data, dict):
            raise MalformedPayload(f"Webhook event must be an object, got {type(data).__name__}")
        return cls(
            event_id=data.get("eventId"),
            subscription_type=str(data.get("subscriptionType") or ""),
            object_id=data.get("objectId"),
            subscription_id=data.get("subscriptionId"),
            portal_id=data.get("portalId"),
            app_id=data.get("appId"),
            occurred_at=to_dt(data.get("occurredAt")),
            attempt_number=data.get("attemptNumber") or 0,
            change_source=data.get("changeSource") or "",
            change_flag=data.get("changeFlag") or "",
            property_name=data.get("propertyName"),
            property_value=data.get("propertyValue"),
        )

    @classmethod
    def unreadable(cls, position: int, reason: str) -> "WebhookEvent":
        return cls(event_id=None, subscription_type="", object_id=None, parse_error=f"item {position}: {reason}")


def parse_events(payload: Any) -> List[WebhookEvent]:
    """
    HubSpot posts a bare JSON array; ``{"events": [...]}`` is accepted too.
    Only a bad envelope raises. An item that is not an event object comes back
    as an unreadable WebhookEvent so it fails on its own in the dispatcher.
    """
    if isinstance(payload, dict):
        payload = payload.get("events")
    if not isinstance(payload, list):
        raise MalformedPayload("Webhook body must be a list of events or an object with an 'events' list")
    events = []
    for position, item in enumerate(payload):
        try:
            events.append(WebhookEvent.from_payload(item))
        except MalformedPayload as e:
            events.append(WebhookEvent.unreadable(position, str(e)))
    return events


@dataclass(frozen=True)
class EventResult:
    event: WebhookEvent
    outcome: str
    error: Optional[str] = None


@dataclass
class BatchResult:
    results: List[EventResult] = field(default_factory=list)

    @property
    def received(self) -> int:
        return len(self.results)

    # every received event counts: HubSpot must not redeliver any of them
    processed = received

    def _count(self, outcome: str) -> int:
        return sum(1 for r in self.results if r.outcome == outcome)

    @property
    def handled(self) -> int:
        return self._count(HANDLED)

    @property
    def skipped(self) -> int:
        return self._count(SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(FAILED)


Handler = Callable[[WebhookEvent], Any]


class WebhookDispatcher:
    def __init__(self, handlers: Dict[str, Handler]):
        self.handlers = dict(handlers)

    def handle(self, event: WebhookEvent) -> EventResult:
        if event.parse_error:
            logger.error("Failed to read webhook event (%s)", event.parse_error)
            return EventResult(event, FAILED, error=event.parse_error)
        handler = self.handlers.get(event.subscription_type)
        if handler is None:
            logger.info("Unhandled webhook event type: %s (event %s)", event.subscription_type, event.event_id)
            return EventResult(event, SKIPPED)
        try:
            handler(event)
        except Exception as exc:
            logger.exception(
                "Failed to process event %s (%s, object %s)",
                event.event_id, event.subscription_type, event.object_id,
            )
            return EventResult(event, FAILED, error=str(exc)[:1000])
        return EventResult(event, HANDLED)

    def dispatch(self, events: Iterable[WebhookEvent]) -> BatchResult:
        batch = BatchResult()
        for event in events:
            batch.results.append(self.handle(event))
        logger.info(
            "Webhook batch done: received=%d handled=%d skipped=%d failed=%d",
            batch.received, batch.handled, batch.skipped, batch.failed,
        )
        return batch

# ---- Handlers ---------------------------------------------------------------

def _log_only(label: str) -> Handler:
    def handler(event: WebhookEvent) -> None:
        logger.info("%s %s: %s (not mirrored locally)", label, event.object_id, event.subscription_type)
    return handler


def build_handlers(crm) -> Dict[str, Handler]:
    """Routing table keyed by exact HubSpot subscription type."""
    def contact(event: WebhookEvent):
        return sync_contact(crm, event.object_id)

    def deal(event: WebhookEvent):
        return sync_deal(crm, event.object_id, occurred_at=event.occurred_at)

    handlers: Dict[str, Handler] = {
        "contact.creation": contact,
        "contact.propertyChange": contact,
        "deal.creation": deal,
        "deal.propertyChange": deal,
        # deletions are recorded in the log only; the cache never shrinks
        "contact.deletion": _log_only("Contact deleted in HubSpot"),
        "deal.deletion": _log_only("Deal deleted in HubSpot"),
    }
    task = _log_only("Task updated in HubSpot")
    for kind in ("creation", "propertyChange", "deletion"):
        handlers[f"task.{kind}"] = task
    custom = _log_only("Custom object updated in HubSpot")
    for name in CUSTOM_OBJECTS:
        handlers[f"{name}.creation"] = custom
        handlers[f"{name}.propertyChange"] = custom
    return handlers
