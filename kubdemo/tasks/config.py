"""Flask configuration for the tasks service."""

import os

AUTH_ADDRESS = os.environ.get('AUTH_ADDRESS', 'localhost:8000')
"""Address of the auth service, as ``host:port`` or a full base URL."""

AUTH_TIMEOUT = os.environ.get('AUTH_TIMEOUT', '5')
"""Seconds to wait for the auth service to verify a token."""

TASKS_FOLDER = os.environ.get('TASKS_FOLDER', 'tasks')
"""Directory holding the task store; mount a volume here."""

TASKS_FILE = os.environ.get('TASKS_FILE', 'tasks.jsonl')
TASKS_LOCK_TIMEOUT = os.environ.get('TASKS_LOCK_TIMEOUT', '10')
