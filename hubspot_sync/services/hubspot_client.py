# hubspot_sync/services/hubspot_client.py
import logging
from functools import lru_cache
from typing import Any, Dict, Iterable, Optional

from django.conf import settings
from hubspot import HubSpot

from ..exceptions import CRMNotConfigured

logger = logging.getLogger(__name__)


class HubSpotCRM:
    """Thin read-only facade over the HubSpot CRM SDK used by the sync pipelines."""

    def __init__(self, access_token: Optional[str] = None, client: Optional[HubSpot] = None):
        token = access_token or getattr(settings, "HUBSPOT_ACCESS_TOKEN", None)
        if client is None and not token:
            raise CRMNotConfigured("Missing HubSpot access token: set HUBSPOT_ACCESS_TOKEN")
        self.client: HubSpot = client or HubSpot(access_token=token)

    def get_contact_properties(self, object_id, properties: Iterable[str]) -> Dict[str, Any]:
        contact = self.client.crm.contacts.basic_api.get_by_id(
            contact_id=str(object_id),
            properties=list(properties),
        )
        return dict(contact.properties or {})

    def get_deal_properties(self, object_id, properties: Iterable[str]) -> Dict[str, Any]:
        deal = self.client.crm.deals.basic_api.get_by_id(
            deal_id=str(object_id),
            properties=list(properties),
        )
        return dict(deal.properties or {})


@lru_cache(maxsize=1)
def default_crm() -> HubSpotCRM:
    """Process-wide client, built on first use from settings."""
    logger.info("Initialising HubSpot CRM client")
    return HubSpotCRM()
