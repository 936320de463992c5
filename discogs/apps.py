from django.apps import AppConfig


class DiscogsConfig(AppConfig):
    name = "discogs"
    verbose_name = "Discogs API client"
