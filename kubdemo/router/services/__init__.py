"""Integrations used by the edge router."""
