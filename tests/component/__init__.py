"""
Component tests for the cart HTTP API.

These tests run the FastAPI app against an in-memory SQLite database
(API routes, service layer, repository and catalog all real).
"""
