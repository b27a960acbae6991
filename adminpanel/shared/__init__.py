"""Shared utilities: notifier, retry wrapper, error normalization and telemetry."""
