"""Data models for topology nodes, filter state, and settings."""
