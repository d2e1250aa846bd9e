import logging
from datetime import datetime
from typing import Optional, Tuple

from django.db import transaction

from ..models import CachedContact, CachedOpportunity, MemberType
from .hubspot_client import HubSpotCRM
from .mappers import (
    CONTACT_PROPERTIES,
    DEAL_PROPERTIES,
    ContactRecord,
    OpportunityRecord,
    contact_properties_to_record,
    deal_properties_to_record,
)

logger = logging.getLogger(__name__)

OPPORTUNITY_KEY_PREFIX = "hubspot-deal-"

# ---- Keys -------------------------------------------------------------------

def opportunity_key(object_id) -> str:
    return f"{OPPORTUNITY_KEY_PREFIX}{object_id}"

# ---- Upserts (mapped record -> cache row) ----------------------------------

def upsert_contact(record: ContactRecord, hubspot_id=None) -> Tuple[CachedContact, bool]:
    """
    Create-or-overwrite the cache row for ``record.email``.
    Every mapped field is replaced; member_type is only defaulted on insert.
    """
    fields = record.as_fields()
    if hubspot_id is not None:
        fields["hubspot_id"] = str(hubspot_id)
    with transaction.atomic():
        contact, created = CachedContact.objects.update_or_create(
            email=record.email,
            defaults=fields,
            create_defaults={**fields, "member_type": MemberType.REGULAR},
        )
    return contact, created


def upsert_opportunity(object_id, record: OpportunityRecord) -> Tuple[CachedOpportunity, bool]:
    fields = record.as_fields()
    with transaction.atomic():
        opportunity, created = CachedOpportunity.objects.update_or_create(
            id=opportunity_key(object_id),
            defaults=fields,
        )
    return opportunity, created

# ---- HubSpot -> local -------------------------------------------------------

def sync_contact(crm: HubSpotCRM, object_id, now: Optional[datetime] = None) -> CachedContact:
    properties = crm.get_contact_properties(object_id, CONTACT_PROPERTIES)
    record = contact_properties_to_record(properties, now=now)
    contact, created = upsert_contact(record, hubspot_id=object_id)
    logger.info(
        "Contact %s synchronized to local cache (%s, %s)",
        object_id, record.email, "created" if created else "updated",
    )
    return contact


def sync_deal(crm: HubSpotCRM, object_id, occurred_at: Optional[datetime] = None) -> CachedOpportunity:
    properties = crm.get_deal_properties(object_id, DEAL_PROPERTIES)
    record = deal_properties_to_record(properties, occurred_at=occurred_at)
    opportunity, created = upsert_opportunity(object_id, record)
    logger.info(
        "Deal %s synchronized to local cache as %s (%s)",
        object_id, opportunity.pk, "created" if created else "updated",
    )
    return opportunity
