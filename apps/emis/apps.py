from django.apps import AppConfig


class EmisConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.emis'
    label = 'emis'
    verbose_name = 'EMI tracker'
