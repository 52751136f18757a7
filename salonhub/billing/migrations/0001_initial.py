import decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import model_utils.fields
from django.db import migrations
from django.db import models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("organizations", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="SubscriptionPlan",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("tier", models.CharField(choices=[("starter", "Starter"), ("standard", "Standard"), ("professional", "Professional"), ("enterprise", "Enterprise")], help_text="Unique plan identifier.", max_length=20, unique=True)),
                ("name", models.CharField(help_text="Display name for the plan.", max_length=50)),
                ("description", models.TextField(blank=True)),
                ("price_monthly", models.DecimalField(decimal_places=2, default=decimal.Decimal("0"), max_digits=10, validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))])),
                ("price_annually", models.DecimalField(decimal_places=2, default=decimal.Decimal("0"), max_digits=10, validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))])),
                ("max_users", models.IntegerField(default=-1, help_text="Maximum active team members. -1 = unlimited.", validators=[django.core.validators.MinValueValidator(-1)])),
                ("max_locations", models.IntegerField(default=-1, help_text="Maximum active locations. -1 = unlimited.", validators=[django.core.validators.MinValueValidator(-1)])),
                ("features", models.JSONField(blank=True, default=list, help_text="Feature keys included in the plan.")),
                ("is_active", models.BooleanField(default=True, help_text="Inactive plans cannot be chosen for new billing records.")),
                ("display_order", models.IntegerField(default=0)),
            ],
            options={
                "ordering": ["display_order"],
            },
        ),
        migrations.CreateModel(
            name="OrganizationBilling",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created", model_utils.fields.AutoCreatedField(default=django.utils.timezone.now, editable=False, verbose_name="created")),
                ("modified", model_utils.fields.AutoLastModifiedField(default=django.utils.timezone.now, editable=False, verbose_name="modified")),
                ("billing_cycle", models.CharField(choices=[("monthly", "Monthly"), ("quarterly", "Quarterly"), ("semi_annual", "Semi-Annual"), ("annual", "Annual")], default="monthly", max_length=20)),
                ("contract_length_months", models.PositiveIntegerField(default=12)),
                ("contract_start_date", models.DateField(blank=True, null=True)),
                ("contract_end_date", models.DateField(blank=True, help_text="Derived from the start date and contract length.", null=True)),
                ("auto_renewal", models.BooleanField(default=True)),
                ("billing_starts_at", models.DateField(blank=True, null=True)),
                ("base_price", models.DecimalField(blank=True, decimal_places=2, help_text="Plan list price captured when the record was saved.", max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))])),
                ("custom_price", models.DecimalField(blank=True, decimal_places=2, help_text="Negotiated monthly price. Overrides the base price.", max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))])),
                ("discount_type", models.CharField(blank=True, choices=[("percentage", "Percentage"), ("fixed_amount", "Fixed Amount"), ("promotional", "Promotional")], max_length=20, null=True)),
                ("discount_value", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))])),
                ("discount_reason", models.CharField(blank=True, max_length=255)),
                ("promo_months", models.PositiveIntegerField(blank=True, null=True)),
                ("promo_price", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))])),
                ("promo_ends_at", models.DateTimeField(blank=True, null=True)),
                ("trial_days", models.PositiveIntegerField(default=0)),
                ("trial_ends_at", models.DateTimeField(blank=True, null=True)),
                ("setup_fee", models.DecimalField(decimal_places=2, default=decimal.Decimal("0"), max_digits=10, validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))])),
                ("setup_fee_paid", models.BooleanField(default=False)),
                ("per_location_fee", models.DecimalField(decimal_places=2, default=decimal.Decimal("0"), help_text="Monthly fee per add-on or overage location.", max_digits=10, validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))])),
                ("per_user_fee", models.DecimalField(decimal_places=2, default=decimal.Decimal("0"), help_text="Monthly fee per add-on or overage user.", max_digits=10, validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))])),
                ("included_locations", models.IntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(-1)])),
                ("included_users", models.IntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(-1)])),
                ("additional_locations_purchased", models.PositiveIntegerField(default=0)),
                ("additional_users_purchased", models.PositiveIntegerField(default=0)),
                ("notes", models.TextField(blank=True)),
                ("org", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="billing", to="organizations.organization")),
                ("plan", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="billing_records", to="billing.subscriptionplan")),
                ("pending_plan", models.ForeignKey(blank=True, help_text="Plan scheduled to take over at the start of the next cycle.", null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="pending_billing_records", to="billing.subscriptionplan")),
            ],
            options={
                "verbose_name": "organization billing",
                "verbose_name_plural": "organization billing",
            },
        ),
    ]
