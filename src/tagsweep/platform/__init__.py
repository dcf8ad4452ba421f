"""Platform services: logging and filesystem helpers."""
