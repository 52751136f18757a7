from django.apps import AppConfig


class BillingConfig(AppConfig):
    """
    Django app configuration for the billing app.

    Handles subscription plans, per-organization billing overrides and the
    pricing, capacity and trial calculations built on them.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "salonhub.billing"
