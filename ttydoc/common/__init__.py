"""Shared types, configuration and settings."""
