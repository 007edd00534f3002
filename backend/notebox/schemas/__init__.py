# Schemas package init
"""Pydantic models for the HTTP contract (request bodies, responses, errors)."""
