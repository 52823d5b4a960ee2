"""Persistence adapters and repository contracts."""
