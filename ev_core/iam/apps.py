from django.apps import AppConfig


class IamConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "ev_core.iam"

    def ready(self) -> None:
        # registers the OpenAPI auth extension
        from ev_core.iam import openapi  # noqa: F401
