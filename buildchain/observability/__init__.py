"""Logging setup for buildchain."""
