"""Shared errors, logging helpers and constants for the object store."""
