"""Integrations used by the users service."""
