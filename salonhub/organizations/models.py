from django.conf import settings
from django.db import models
from django.db.models import Case
from django.db.models import CharField
from django.db.models import IntegerField
from django.db.models import Value
from django.db.models import When
from django.utils.text import slugify
from django.utils.translation import gettext_lazy as _
from model_utils.models import TimeStampedModel

from salonhub.billing.constants import SUBSCRIPTION_STATUS_PRIORITY
from salonhub.billing.constants import SubscriptionStatus


class OrganizationQuerySet(models.QuerySet):
    def by_status_priority(self):
        """Order past-due accounts first, then active, trialing, inactive, cancelled."""
        return self.annotate(
            status_priority=Case(
                *[
                    When(subscription_status=status, then=Value(priority))
                    for status, priority in SUBSCRIPTION_STATUS_PRIORITY.items()
                ],
                default=Value(len(SUBSCRIPTION_STATUS_PRIORITY)),
                output_field=IntegerField(),
            ),
        ).order_by("status_priority", "name")


class Organization(TimeStampedModel):
    """
    A tenant business (a salon or salon group) on the platform.
    """

    name = CharField(
        max_length=255,
        help_text=_("Name of the organization, e.g. 'Downtown Hair Studio'"),
    )
    slug = models.SlugField(
        unique=True,
        blank=True,
    )
    subscription_status = models.CharField(
        max_length=20,
        choices=SubscriptionStatus.choices,
        default=SubscriptionStatus.INACTIVE,
    )
    trial_ends_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text=_(
            "Organization-level trial end. A trial end on the billing record "
            "takes precedence.",
        ),
    )

    objects = OrganizationQuerySet.as_manager()

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        """Override save to ensure slug is set if not provided."""
        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)


class Location(TimeStampedModel):
    """A physical site operated by an organization."""

    org = models.ForeignKey(
        Organization,
        on_delete=models.CASCADE,
        related_name="locations",
    )
    name = models.CharField(max_length=255)
    is_active = models.BooleanField(default=True)

    class Meta:
        indexes = [
            models.Index(fields=["org", "is_active"], name="org_location_active_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.org.name})"


class TeamMember(TimeStampedModel):
    """
    A user seat in an organization. Inactive members do not use a seat.
    """

    org = models.ForeignKey(
        Organization,
        on_delete=models.CASCADE,
        related_name="team_members",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="team_memberships",
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        unique_together = [("user", "org")]
        indexes = [
            models.Index(fields=["org", "is_active"], name="org_member_active_idx"),
        ]

    def __str__(self):
        return f"user '{self.user.get_username()}' in org '{self.org.name}'"
