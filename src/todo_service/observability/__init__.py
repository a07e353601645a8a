"""Observability – correlation, logging, health, events."""
