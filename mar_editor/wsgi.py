"""WSGI config for the MAR editor project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "mar_editor.settings")

application = get_wsgi_application()
