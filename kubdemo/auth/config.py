"""Flask configuration for the auth service."""

import os

STATIC_TOKENS = os.environ.get('STATIC_TOKENS', 'abc:u1')
"""Comma-separated ``token:uid`` pairs that are always accepted."""
