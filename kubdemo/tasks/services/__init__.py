"""Integrations used by the tasks service."""
