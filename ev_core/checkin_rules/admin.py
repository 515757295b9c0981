from __future__ import annotations

from django.contrib import admin

from ev_core.checkin_rules.models import CheckinRule


@admin.register(CheckinRule)
class CheckinRuleAdmin(admin.ModelAdmin):
    """
    Read-only view. Writes must go through CheckinRuleService.replace_rules
    so a rule set is never stored without validation.
    """
    list_display = (
        "name",
        "event",
        "is_active",
        "requirement",
        "release_minutes_before",
        "close_minutes_after",
        "created_at",
    )
    list_filter = ("is_active", "requirement")
    search_fields = ("name", "event__name")
    list_select_related = ("event",)
    ordering = ("event__starts_at", "event", "position")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
