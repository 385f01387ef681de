from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from caretrack.stores.registry import build_stores


class Command(BaseCommand):
    help = "Fetch the public vaccine catalogue from the backend and store it for the console."

    def add_arguments(self, parser):
        parser.add_argument('--base-url', help='Backend API base URL (defaults to CARETRACK_API_BASE_URL)')

    def handle(self, *args, **options):
        now = timezone.now()
        store = build_stores(base_url=options.get('base_url')).vaccines
        store.fetch_vaccines()
        if store.state.error:
            raise CommandError(f"Could not fetch vaccine catalogue: {store.state.error}")

        groups = []
        for v in store.state.vaccines:
            if v.age_group not in groups:
                groups.append(v.age_group)
        self.stdout.write(self.style.SUCCESS(
            f"Stored {len(store.state.vaccines)} vaccines in {len(groups)} age groups "
            f"under '{store.storage_key}' at {now}"
        ))
