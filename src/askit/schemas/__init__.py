# src/askit/schemas/__init__.py
"""Pydantic schemas for the AskIt API."""
