"""Shared helpers: telemetry (logging, tracing) and utilities."""
