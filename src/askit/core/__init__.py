"""Core configuration, errors, logging and password hashing."""
