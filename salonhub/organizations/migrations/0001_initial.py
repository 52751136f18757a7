import django.db.models.deletion
import django.utils.timezone
import model_utils.fields
from django.conf import settings
from django.db import migrations
from django.db import models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Organization",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created", model_utils.fields.AutoCreatedField(default=django.utils.timezone.now, editable=False, verbose_name="created")),
                ("modified", model_utils.fields.AutoLastModifiedField(default=django.utils.timezone.now, editable=False, verbose_name="modified")),
                ("name", models.CharField(help_text="Name of the organization, e.g. 'Downtown Hair Studio'", max_length=255)),
                ("slug", models.SlugField(blank=True, unique=True)),
                ("subscription_status", models.CharField(choices=[("active", "Active"), ("trialing", "Trialing"), ("past_due", "Past Due"), ("cancelled", "Cancelled"), ("inactive", "Inactive")], default="inactive", max_length=20)),
                ("trial_ends_at", models.DateTimeField(blank=True, help_text="Organization-level trial end. A trial end on the billing record takes precedence.", null=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Location",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created", model_utils.fields.AutoCreatedField(default=django.utils.timezone.now, editable=False, verbose_name="created")),
                ("modified", model_utils.fields.AutoLastModifiedField(default=django.utils.timezone.now, editable=False, verbose_name="modified")),
                ("name", models.CharField(max_length=255)),
                ("is_active", models.BooleanField(default=True)),
                ("org", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="locations", to="organizations.organization")),
            ],
            options={
                "indexes": [models.Index(fields=["org", "is_active"], name="org_location_active_idx")],
            },
        ),
        migrations.CreateModel(
            name="TeamMember",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created", model_utils.fields.AutoCreatedField(default=django.utils.timezone.now, editable=False, verbose_name="created")),
                ("modified", model_utils.fields.AutoLastModifiedField(default=django.utils.timezone.now, editable=False, verbose_name="modified")),
                ("is_active", models.BooleanField(default=True)),
                ("org", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="team_members", to="organizations.organization")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="team_memberships", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "indexes": [models.Index(fields=["org", "is_active"], name="org_member_active_idx")],
                "unique_together": {("user", "org")},
            },
        ),
    ]
