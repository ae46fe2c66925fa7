"""Pydantic schemas for input files."""
