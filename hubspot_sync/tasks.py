# hubspot_sync/tasks.py
from celery import shared_task, group

from .services.hubspot_client import default_crm
from .services.pipelines import sync_contact, sync_deal

OBJECT_TYPES = ("contact", "deal")


@shared_task(bind=True, name="hubspot_sync.resync_object")
def resync_object_task(self, object_type: str, object_id):
    """Re-run the webhook fetch -> map -> upsert path for a single HubSpot object."""
    if object_type == "contact":
        row = sync_contact(default_crm(), object_id)
    elif object_type == "deal":
        row = sync_deal(default_crm(), object_id)
    else:
        raise ValueError(f"Unsupported HubSpot object type: {object_type}")
    return {"object_type": object_type, "object_id": str(object_id), "key": str(row.pk)}


@shared_task(bind=True, name="hubspot_sync.resync_objects")
def resync_objects_task(self, object_type: str, object_ids):
    if object_type not in OBJECT_TYPES:
        raise ValueError(f"Unsupported HubSpot object type: {object_type}")
    g = group([resync_object_task.si(object_type, object_id) for object_id in object_ids])
    res = g.apply_async()
    return {"group_id": res.id, "count": len(object_ids)}
