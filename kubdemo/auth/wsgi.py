"""Web Server Gateway Interface entry-point."""

from kubdemo.base.wsgi import application_for
from kubdemo.auth.factory import create_app

application = application_for(create_app)
