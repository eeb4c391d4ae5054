from django.apps import AppConfig


class StandingOrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "standing_orders"
