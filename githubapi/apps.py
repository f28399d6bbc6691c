from django.apps import AppConfig


class GithubapiConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "githubapi"
    verbose_name = "GitHub sync"
