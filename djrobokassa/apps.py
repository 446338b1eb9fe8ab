from django.apps import AppConfig


class DjRobokassaConfig(AppConfig):
    name = 'djrobokassa'
    verbose_name = 'Robokassa Payments'
