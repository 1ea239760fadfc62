from django.conf import settings
from django.contrib.staticfiles.management.commands.runserver import Command as RunserverCommand


class Command(RunserverCommand):
    """``runserver`` listening on ``settings.PORT`` unless a port is given."""

    default_port = str(settings.PORT)
