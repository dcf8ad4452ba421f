"""Configuration loading, persisted defaults, and derived runtime settings."""
