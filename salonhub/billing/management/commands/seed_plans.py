"""
Management command to seed the subscription plan catalog.

Creates or updates the four plan tiers (Starter, Standard, Professional,
Enterprise) with their prices and limits.

Usage:
    python manage.py seed_plans              # Create missing plans
    python manage.py seed_plans --force      # Also update existing plans
"""

from decimal import Decimal

from django.core.management.base import BaseCommand

from salonhub.billing.constants import UNLIMITED
from salonhub.billing.constants import PlanTier
from salonhub.billing.formatting import format_currency
from salonhub.billing.formatting import format_limit
from salonhub.billing.models import SubscriptionPlan

PLAN_CONFIG = {
    PlanTier.STARTER: {
        "name": "Starter",
        "description": "For a single-chair or single-location salon getting started.",
        "price_monthly": Decimal("99.00"),
        "price_annually": Decimal("950.00"),
        "max_locations": 1,
        "max_users": 5,
        "features": ["scheduling", "client_profiles"],
        "display_order": 1,
    },
    PlanTier.STANDARD: {
        "name": "Standard",
        "description": "For an established salon with a growing team.",
        "price_monthly": Decimal("199.00"),
        "price_annually": Decimal("1910.00"),
        "max_locations": 2,
        "max_users": 15,
        "features": ["scheduling", "client_profiles", "online_booking"],
        "display_order": 2,
    },
    PlanTier.PROFESSIONAL: {
        "name": "Professional",
        "description": "For multi-location groups that need analytics and payroll.",
        "price_monthly": Decimal("299.00"),
        "price_annually": Decimal("2870.00"),
        "max_locations": 5,
        "max_users": 50,
        "features": [
            "scheduling",
            "client_profiles",
            "online_booking",
            "analytics",
            "payroll",
        ],
        "display_order": 3,
    },
    PlanTier.ENTERPRISE: {
        "name": "Enterprise",
        "description": "Unlimited locations and team members with negotiated pricing.",
        "price_monthly": Decimal("499.00"),
        "price_annually": Decimal("4790.00"),
        "max_locations": UNLIMITED,
        "max_users": UNLIMITED,
        "features": [
            "scheduling",
            "client_profiles",
            "online_booking",
            "analytics",
            "payroll",
            "inventory",
            "ai_insights",
        ],
        "display_order": 4,
    },
}


class Command(BaseCommand):
    help = "Seed subscription plans"

    def add_arguments(self, parser):
        parser.add_argument(
            "--force",
            action="store_true",
            help="Update existing plans with latest configuration",
        )

    def handle(self, *args, **options):
        self._seed_plans(force_update=options["force"])
        self._show_summary()

    def _seed_plans(self, force_update: bool):
        """Create or update SubscriptionPlan records."""
        self.stdout.write("\n" + "=" * 60)
        self.stdout.write("Seeding Plans")
        self.stdout.write("=" * 60)

        for tier, config in PLAN_CONFIG.items():
            plan, created = SubscriptionPlan.objects.get_or_create(
                tier=tier,
                defaults=config,
            )

            if created:
                self.stdout.write(
                    self.style.SUCCESS(f"  Created: {plan.name}"),
                )
            elif force_update:
                for field, value in config.items():
                    setattr(plan, field, value)
                plan.save()
                self.stdout.write(
                    self.style.SUCCESS(f"  Updated: {plan.name}"),
                )
            else:
                self.stdout.write(
                    f"  Exists: {plan.name} (use --force to update)",
                )

    def _show_summary(self):
        """Show final summary of all plans."""
        self.stdout.write("\n" + "=" * 60)
        self.stdout.write("Summary")
        self.stdout.write("=" * 60)

        for plan in SubscriptionPlan.objects.all().order_by("display_order"):
            self.stdout.write(
                f"  {plan.name}: {format_currency(plan.price_monthly)}/mo, "
                f"{format_limit(plan.max_locations)} locations, "
                f"{format_limit(plan.max_users)} users",
            )

        self.stdout.write(self.style.SUCCESS("\nDone!"))
