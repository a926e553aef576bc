"""Pydantic Schemas — report shapes handed to runners and reporters."""
