"""
schemas/ — Pydantic models for the Todo Service

Validates the shape of records read back from the store and
gives error responses one consistent body.
"""
