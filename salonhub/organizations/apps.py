from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class OrganizationsConfig(AppConfig):
    """
    Tenant records read by the billing layer: organizations, their
    locations and their team members.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "salonhub.organizations"
    verbose_name = _("Organizations")
