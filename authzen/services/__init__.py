"""Integrations with services on which access checks depend."""
