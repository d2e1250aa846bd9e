from django.urls import path

from .views import HubSpotWebhookView

app_name = "hubspot_sync"

urlpatterns = [
    path("hubspot", HubSpotWebhookView.as_view(), name="hubspot-webhook"),
    path("hubspot/", HubSpotWebhookView.as_view()),
]
