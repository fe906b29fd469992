"""Logging pipeline adapters (JSON console provider, logger factory)."""
