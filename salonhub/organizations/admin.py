from django.contrib import admin

from salonhub.organizations.models import Location
from salonhub.organizations.models import Organization
from salonhub.organizations.models import TeamMember


class LocationInline(admin.TabularInline):
    model = Location
    extra = 0


class TeamMemberInline(admin.TabularInline):
    model = TeamMember
    extra = 0
    raw_id_fields = ["user"]


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ["name", "slug", "subscription_status", "trial_ends_at"]
    list_filter = ["subscription_status"]
    search_fields = ["name", "slug"]
    readonly_fields = ["created", "modified"]
    inlines = [LocationInline, TeamMemberInline]

    def get_queryset(self, request):
        return super().get_queryset(request).by_status_priority()
