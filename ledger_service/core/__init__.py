"""Configuration, dependency wiring and shared helpers."""
