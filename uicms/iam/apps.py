from django.apps import AppConfig


class IamConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "uicms.iam"
    label = "iam"

    def ready(self):
        # Register the drf-spectacular authentication extension
        from uicms.iam import openapi  # noqa: F401
