"""Data models for EVE SSO."""
