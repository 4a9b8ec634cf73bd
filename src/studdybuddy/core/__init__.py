"""Core building blocks: configuration and credential handling."""
