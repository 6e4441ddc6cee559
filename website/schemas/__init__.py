"""Pydantic Schemas — request/response contracts for the tools API."""
