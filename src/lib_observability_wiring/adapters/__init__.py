"""Adapters for environment variables and the logging pipeline."""
