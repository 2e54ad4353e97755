"""Adapters supplying data to the core from outside sources."""
