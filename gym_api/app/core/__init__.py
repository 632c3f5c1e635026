"""Configuration, logging, error types and the database handle."""
