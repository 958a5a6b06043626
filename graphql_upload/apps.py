from django.apps import AppConfig


class GraphqlUploadConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'graphql_upload'
    verbose_name = 'GraphQL Upload'
