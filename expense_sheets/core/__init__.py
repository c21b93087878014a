"""Configuration, logging and HTTP error handling."""
