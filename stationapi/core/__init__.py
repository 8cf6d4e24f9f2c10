"""Core configuration, infrastructure and error kinds."""
