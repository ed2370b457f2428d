"""Core infrastructure: configuration, logging, infrastructure exceptions."""
