"""Configuration, persistence, security and shared helpers."""
