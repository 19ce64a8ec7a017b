"""
Shared helpers for the functional tests.
"""
