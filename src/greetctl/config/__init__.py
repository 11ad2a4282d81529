"""Configuration layer — settings, TOML discovery and logging setup."""
