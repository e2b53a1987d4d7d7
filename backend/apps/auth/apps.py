from django.apps import AppConfig


class AuthConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.auth'
    # django.contrib.auth already owns the "auth" label
    label = 'shopstack_auth'
