"""Core infrastructure: configuration, logging, real-time channel."""
