"""Adapters reading configuration from outside the process."""
