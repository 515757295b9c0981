from __future__ import annotations

from django.contrib import admin

from ev_core.events.models import Event


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ("name", "starts_at", "location", "status", "updated_at")
    list_filter = ("status",)
    search_fields = ("name", "location")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("starts_at",)
