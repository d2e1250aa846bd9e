# hubspot_sync/models.py

from django.db import models
from django.utils import timezone


AMOUNT_MAX_DIGITS = 14
AMOUNT_DECIMAL_PLACES = 2


class MemberType(models.TextChoices):
    REGULAR = "REGULAR", "Regular"
    PREMIUM = "PREMIUM", "Premium"
    ADMIN = "ADMIN", "Admin"


class OpportunityStatus(models.TextChoices):
    ACTIVE = "Active", "Active"
    IN_PROGRESS = "In Progress", "In Progress"
    UNDER_REVIEW = "Under Review", "Under Review"
    COMPLETED = "Completed", "Completed"


class CachedContact(models.Model):
    """Local mirror of a HubSpot contact, keyed by email."""
    email = models.EmailField(max_length=254, unique=True)
    hubspot_id = models.CharField(max_length=64, blank=True, default="", db_index=True)
    name = models.CharField(max_length=255, blank=True, default="")
    phone = models.CharField(max_length=64, blank=True, null=True)
    company = models.CharField(max_length=255, blank=True, default="")
    # set once on insert; sync never maps it
    member_type = models.CharField(max_length=32, choices=MemberType.choices, default=MemberType.REGULAR)
    last_active = models.DateTimeField(default=timezone.now)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "hubspot_cached_contact"

    def __str__(self):
        return f"{self.name or '-'} <{self.email}>"


class CachedOpportunity(models.Model):
    """Local mirror of a HubSpot deal. Primary key is ``hubspot-deal-<objectId>``."""
    id = models.CharField(max_length=64, primary_key=True)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    type = models.CharField(max_length=128, blank=True, default="")
    status = models.CharField(max_length=32, choices=OpportunityStatus.choices, default=OpportunityStatus.ACTIVE)
    date_posted = models.DateTimeField(default=timezone.now)
    deadline = models.DateTimeField(blank=True, null=True)
    estimated_value = models.DecimalField(max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES, blank=True, null=True)

    class Meta:
        db_table = "hubspot_cached_opportunity"
        indexes = [
            models.Index(fields=["status", "deadline"], name="hubspot_opp_status_dl_idx"),
        ]

    def __str__(self):
        return f"[{self.id}] {self.title}"
