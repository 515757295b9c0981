from django.apps import AppConfig


class CheckinRulesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "ev_core.checkin_rules"
    verbose_name = "Check-in rules"
