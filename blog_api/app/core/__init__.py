"""Configuration, logging, error and database helpers."""
