"""Configuration, logging and error types for unlockcal."""
