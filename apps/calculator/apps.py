from django.apps import AppConfig


class CalculatorConfig(AppConfig):
    name = 'apps.calculator'
    label = 'calculator'
