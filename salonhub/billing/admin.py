"""
Django admin configuration for billing models.

Provides platform admin interfaces for:
- SubscriptionPlan: View/edit catalog tiers, prices and limits
- OrganizationBilling: View/manage per-organization billing overrides, with
  the computed monthly and first-invoice amounts shown alongside
"""

from django.contrib import admin
from django.db.models import Count
from django.db.models import Q

from salonhub.billing.capacity import UsageSnapshot
from salonhub.billing.formatting import format_currency
from salonhub.billing.formatting import format_limit
from salonhub.billing.models import OrganizationBilling
from salonhub.billing.models import SubscriptionPlan
from salonhub.billing.pricing import compute_billing
from salonhub.billing.services import get_usage_snapshot


@admin.register(SubscriptionPlan)
class SubscriptionPlanAdmin(admin.ModelAdmin):
    """Admin for catalog plans."""

    list_display = [
        "tier",
        "name",
        "monthly_price_display",
        "location_limit_display",
        "user_limit_display",
        "is_active",
        "display_order",
    ]
    list_editable = ["is_active", "display_order"]
    ordering = ["display_order"]
    search_fields = ["tier", "name"]

    fieldsets = [
        (None, {"fields": ["tier", "name", "description", "is_active"]}),
        ("Pricing", {"fields": ["price_monthly", "price_annually"]}),
        (
            "Limits",
            {
                "fields": ["max_locations", "max_users"],
                "description": "Use -1 for unlimited.",
            },
        ),
        ("Features", {"fields": ["features"]}),
        ("Display", {"fields": ["display_order"]}),
    ]

    @admin.display(description="Monthly price", ordering="price_monthly")
    def monthly_price_display(self, obj):
        return format_currency(obj.price_monthly)

    @admin.display(description="Locations")
    def location_limit_display(self, obj):
        return format_limit(obj.max_locations)

    @admin.display(description="Users")
    def user_limit_display(self, obj):
        return format_limit(obj.max_users)


@admin.register(OrganizationBilling)
class OrganizationBillingAdmin(admin.ModelAdmin):
    """Admin for organization billing records."""

    list_display = [
        "org",
        "plan",
        "billing_cycle",
        "effective_monthly_display",
        "trial_ends_at",
        "promo_ends_at",
    ]
    list_filter = ["billing_cycle", "plan", "discount_type"]
    search_fields = ["org__name"]
    raw_id_fields = ["org"]
    readonly_fields = [
        "contract_end_date",
        "billing_starts_at",
        "base_price",
        "promo_ends_at",
        "trial_ends_at",
        "effective_monthly_display",
        "first_invoice_display",
        "created",
        "modified",
    ]

    fieldsets = [
        (None, {"fields": ["org", "plan", "pending_plan", "billing_cycle"]}),
        (
            "Contract",
            {
                "fields": [
                    "contract_length_months",
                    "contract_start_date",
                    "contract_end_date",
                    "billing_starts_at",
                    "auto_renewal",
                ],
            },
        ),
        (
            "Custom Pricing",
            {
                "fields": [
                    "base_price",
                    "custom_price",
                    "discount_type",
                    "discount_value",
                    "discount_reason",
                ],
            },
        ),
        ("Promo", {"fields": ["promo_months", "promo_price", "promo_ends_at"]}),
        ("Trial", {"fields": ["trial_days", "trial_ends_at"]}),
        (
            "Fees & Add-ons",
            {
                "fields": [
                    "setup_fee",
                    "setup_fee_paid",
                    "per_location_fee",
                    "per_user_fee",
                    "included_locations",
                    "included_users",
                    "additional_locations_purchased",
                    "additional_users_purchased",
                ],
                "description": "Leave included counts blank to use the plan limits.",
            },
        ),
        ("Computed", {"fields": ["effective_monthly_display", "first_invoice_display"]}),
        ("Notes", {"fields": ["notes"]}),
        ("Timestamps", {"fields": ["created", "modified"]}),
    ]

    def get_queryset(self, request):
        return (
            super()
            .get_queryset(request)
            .select_related("org", "plan")
            .annotate(
                active_location_count=Count(
                    "org__locations",
                    filter=Q(org__locations__is_active=True),
                    distinct=True,
                ),
                active_user_count=Count(
                    "org__team_members",
                    filter=Q(org__team_members__is_active=True),
                    distinct=True,
                ),
            )
        )

    def _calculation(self, obj):
        """Compute once per object, using the annotated usage counts when present."""
        calculation = getattr(obj, "_admin_calculation", None)
        if calculation is None:
            if hasattr(obj, "active_location_count"):
                usage = UsageSnapshot(obj.active_location_count, obj.active_user_count)
            else:
                usage = get_usage_snapshot(obj.org)
            calculation = compute_billing(
                obj,
                obj.plan,
                usage.location_count,
                usage.user_count,
            )
            obj._admin_calculation = calculation  # noqa: SLF001
        return calculation

    @admin.display(description="Effective monthly")
    def effective_monthly_display(self, obj):
        if obj.pk is None:
            return "-"
        return format_currency(self._calculation(obj).effective_monthly_amount)

    @admin.display(description="First invoice")
    def first_invoice_display(self, obj):
        if obj.pk is None:
            return "-"
        return format_currency(self._calculation(obj).first_invoice_amount)

    def save_model(self, request, obj, form, change):
        if obj.plan is not None:
            obj.base_price = obj.plan.price_monthly
        obj.apply_contract_schedule()
        super().save_model(request, obj, form, change)
