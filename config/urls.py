from django.conf import settings
from django.contrib import admin
from django.urls import path

urlpatterns = [
    # Django Admin: platform screens for plans and organization billing
    path(settings.ADMIN_URL, admin.site.urls),
]
