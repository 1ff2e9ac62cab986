"""Integrations used by the auth service."""
