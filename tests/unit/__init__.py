"""
Unit tests for the cart validation layer, store, service and cleanup job.
"""
