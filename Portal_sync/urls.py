from django.urls import include, path

urlpatterns = [
    path("api/webhooks/", include("hubspot_sync.urls")),
]
