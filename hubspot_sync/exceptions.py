# hubspot_sync/exceptions.py


class HubSpotSyncError(Exception):
    """Base class for errors raised by the HubSpot sync app."""


class WebhookAuthError(HubSpotSyncError):
    """Inbound webhook rejected before any event is read."""
    status_code = 401
    public_message = "Webhook authentication failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)


class MissingSignature(WebhookAuthError):
    status_code = 401
    public_message = "Missing HubSpot signature"


class InvalidSignature(WebhookAuthError):
    status_code = 401
    public_message = "Invalid HubSpot signature"


class SecretNotConfigured(WebhookAuthError):
    status_code = 500
    public_message = "HubSpot client secret not configured"


class MalformedPayload(HubSpotSyncError):
    """Request body is not a JSON batch of webhook events."""


class MappingError(HubSpotSyncError):
    """A HubSpot record cannot be turned into a cache row."""


class CRMNotConfigured(HubSpotSyncError):
    """No HubSpot access token to read contacts and deals with."""
