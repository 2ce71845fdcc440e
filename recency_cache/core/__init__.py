"""Configuration and error types for the cache."""
