# hubspot_sync/views.py
import json
import logging

from django.conf import settings
from django.http import HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from .exceptions import CRMNotConfigured, MalformedPayload, WebhookAuthError
from .services.dispatcher import WebhookDispatcher, build_handlers, parse_events
from .services.hubspot_client import default_crm
from .services.signature import check_request_signature

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-HubSpot-Signature-v3"


@method_decorator(csrf_exempt, name="dispatch")
class HubSpotWebhookView(View):
    """
    Inbound HubSpot webhooks.
    POST: verify signature on the raw body -> parse -> dispatch -> acknowledge.
    GET: subscription handshake (echo ``challenge``) or a status probe.
    """
    http_method_names = ["get", "post"]
    crm = None  # injected via as_view(crm=...); falls back to the process-wide client

    def get_dispatcher(self) -> WebhookDispatcher:
        return WebhookDispatcher(build_handlers(self.crm or default_crm()))

    def get(self, request, *args, **kwargs):
        challenge = request.GET.get("challenge")
        if challenge:
            return HttpResponse(challenge, content_type="text/plain", status=200)
        return JsonResponse({"status": "HubSpot webhook endpoint active"})

    def post(self, request, *args, **kwargs):
        body = request.body
        try:
            check_request_signature(
                body,
                request.headers.get(SIGNATURE_HEADER),
                getattr(settings, "HUBSPOT_CLIENT_SECRET", None),
            )
        except WebhookAuthError as e:
            logger.warning("Rejected HubSpot webhook: %s", e)
            return JsonResponse({"error": e.public_message}, status=e.status_code)

        try:
            events = parse_events(json.loads(body))
        except (ValueError, MalformedPayload):
            logger.exception("HubSpot webhook processing error")
            return JsonResponse({"error": "Webhook processing failed"}, status=500)

        try:
            dispatcher = self.get_dispatcher()
        except CRMNotConfigured:
            logger.exception("HubSpot CRM client unavailable")
            return JsonResponse({"error": "HubSpot access token not configured"}, status=500)

        result = dispatcher.dispatch(events)
        return JsonResponse({"success": True, "processed": result.processed})
