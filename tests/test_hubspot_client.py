from unittest.mock import MagicMock

from hubspot_sync.services.hubspot_client import HubSpotCRM
from hubspot_sync.services.mappers import CONTACT_PROPERTIES, DEAL_PROPERTIES


def _sdk(properties):
    sdk = MagicMock()
    sdk.crm.contacts.basic_api.get_by_id.return_value = MagicMock(properties=properties)
    sdk.crm.deals.basic_api.get_by_id.return_value = MagicMock(properties=properties)
    return sdk


def test_contact_fetch_passes_id_and_whitelist():
    sdk = _sdk({"email": "jane@example.com", "firstname": "Jane"})
    crm = HubSpotCRM(client=sdk)

    properties = crm.get_contact_properties(512, iter(CONTACT_PROPERTIES))

    sdk.crm.contacts.basic_api.get_by_id.assert_called_once_with(
        contact_id="512", properties=list(CONTACT_PROPERTIES),
    )
    assert properties == {"email": "jane@example.com", "firstname": "Jane"}


def test_deal_fetch_passes_id_and_whitelist():
    sdk = _sdk({"dealname": "Clinic"})
    crm = HubSpotCRM(client=sdk)

    assert crm.get_deal_properties("456", DEAL_PROPERTIES) == {"dealname": "Clinic"}
    sdk.crm.deals.basic_api.get_by_id.assert_called_once_with(deal_id="456", properties=list(DEAL_PROPERTIES))


def test_missing_properties_become_empty_dict():
    crm = HubSpotCRM(client=_sdk(None))
    assert crm.get_contact_properties(1, ["email"]) == {}
    assert crm.get_deal_properties(1, ["dealname"]) == {}


def test_returned_dict_is_a_copy():
    source = {"email": "a@example.com"}
    crm = HubSpotCRM(client=_sdk(source))
    crm.get_contact_properties(1, ["email"])["email"] = "changed"
    assert source["email"] == "a@example.com"
