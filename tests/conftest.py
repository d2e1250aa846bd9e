"""Shared fixtures: a fake HubSpot CRM and signed webhook requests."""

import json

import pytest
from django.test import RequestFactory

from hubspot_sync.services.signature import compute_signature

SECRET = "test-client-secret"


class FakeCRM:
    """In-memory stand-in for HubSpotCRM; records every fetch."""

    def __init__(self, contacts=None, deals=None, fail_on=()):
        self.contacts = contacts or {}
        self.deals = deals or {}
        self.fail_on = set(fail_on)
        self.calls = []

    def _get(self, store, kind, object_id, properties):
        self.calls.append((kind, str(object_id), list(properties)))
        if str(object_id) in self.fail_on:
            raise RuntimeError(f"HubSpot API error for {kind} {object_id}")
        return dict(store.get(str(object_id), {}))

    def get_contact_properties(self, object_id, properties):
        return self._get(self.contacts, "contact", object_id, properties)

    def get_deal_properties(self, object_id, properties):
        return self._get(self.deals, "deal", object_id, properties)


def make_event(event_id, subscription_type, object_id, **extra):
    event = {
        "eventId": event_id,
        "subscriptionId": 12345,
        "portalId": 8652184,
        "appId": 1160452,
        "occurredAt": 1718000000000,
        "subscriptionType": subscription_type,
        "attemptNumber": 0,
        "objectId": object_id,
        "changeSource": "CRM_UI",
        "changeFlag": "UPDATED",
    }
    event.update(extra)
    return event


@pytest.fixture
def fake_crm():
    return FakeCRM()


@pytest.fixture
def hubspot_secret(settings):
    settings.HUBSPOT_CLIENT_SECRET = SECRET
    return SECRET


@pytest.fixture
def signed_post():
    factory = RequestFactory()

    def build(payload, secret=SECRET, signature=None, raw=None):
        body = raw if raw is not None else json.dumps(payload)
        headers = {}
        sig = signature if signature is not None else compute_signature(body, secret)
        if sig:
            headers["HTTP_X_HUBSPOT_SIGNATURE_V3"] = sig
        return factory.post("/api/webhooks/hubspot", data=body, content_type="application/json", **headers)

    return build
