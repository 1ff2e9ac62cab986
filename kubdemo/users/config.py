"""Flask configuration for the users service."""

import os

AUTH_ADDRESS = os.environ.get('AUTH_ADDRESS', 'localhost:8000')
"""Address of the auth service, as ``host:port`` or a full base URL."""

AUTH_TIMEOUT = os.environ.get('AUTH_TIMEOUT', '5')
