"""Smoke runner for a deployed folder manager."""
