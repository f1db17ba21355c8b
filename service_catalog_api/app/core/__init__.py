"""Configuration, logging, storage and security building blocks."""
