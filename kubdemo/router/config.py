"""Flask configuration for the edge router."""

import os

AUTH_SERVICE_URL = os.environ.get('AUTH_SERVICE_URL', 'localhost:8000')
USERS_SERVICE_URL = os.environ.get('USERS_SERVICE_URL', 'localhost:8001')
TASKS_SERVICE_URL = os.environ.get('TASKS_SERVICE_URL', 'localhost:8002')
FRONTEND_URL = os.environ.get('FRONTEND_URL', 'localhost:3000')
"""Anything not claimed by a service prefix is served from here."""

PROXY_TIMEOUT = os.environ.get('PROXY_TIMEOUT', '30')
"""Seconds to wait for a backend before answering 504."""
