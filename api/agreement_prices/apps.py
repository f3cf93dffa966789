from django.apps import AppConfig


class AgreementPricesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'api.agreement_prices'
    label = 'agreement_prices'
    verbose_name = 'Precios por Convenio'
