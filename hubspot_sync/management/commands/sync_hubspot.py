# sync_hubspot.py
from django.core.management.base import BaseCommand, CommandError
from hubspot_sync.tasks import resync_objects_task


class Command(BaseCommand):
    help = "Resync HubSpot contacts/deals into the local cache (same path as webhooks)."

    def add_arguments(self, parser):
        parser.add_argument("--contact", action="append", default=[], metavar="ID",
                            help="HubSpot contact id (repeatable)")
        parser.add_argument("--deal", action="append", default=[], metavar="ID",
                            help="HubSpot deal id (repeatable)")

    def handle(self, *args, **options):
        contacts, deals = options["contact"], options["deal"]
        if not contacts and not deals:
            raise CommandError("Pass at least one --contact or --deal id.")

        if contacts:
            result = resync_objects_task.delay("contact", contacts)
            self.stdout.write(self.style.SUCCESS(f"Contacts resync started: {result.id}"))
        if deals:
            result = resync_objects_task.delay("deal", deals)
            self.stdout.write(self.style.SUCCESS(f"Deals resync started: {result.id}"))
