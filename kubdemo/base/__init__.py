"""Plumbing shared by all of the kub-demo services."""
