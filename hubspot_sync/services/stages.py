# hubspot_sync/services/stages.py
from ..models import OpportunityStatus

DEFAULT_STATUS = OpportunityStatus.ACTIVE

# HubSpot default sales pipeline stage ids
DEAL_STAGE_STATUS = {
    "appointmentscheduled": OpportunityStatus.ACTIVE,
    "qualifiedtobuy": OpportunityStatus.ACTIVE,
    "presentationscheduled": OpportunityStatus.IN_PROGRESS,
    "decisionmakerboughtin": OpportunityStatus.IN_PROGRESS,
    "contractsent": OpportunityStatus.UNDER_REVIEW,
    "closedwon": OpportunityStatus.COMPLETED,
    "closedlost": OpportunityStatus.COMPLETED,
}


def deal_stage_to_status(stage: str | None) -> str:
    """Unknown stages fall back to Active so new pipeline stages never block ingestion."""
    if not stage:
        return DEFAULT_STATUS
    return DEAL_STAGE_STATUS.get(stage.strip(), DEFAULT_STATUS)
