"""Application package for the MCQ question authoring backend.

This package exposes the schema, validation, service and form modules used
by the FastAPI application. It is intentionally lightweight; individual
modules contain the concrete implementations and documentation.
"""
