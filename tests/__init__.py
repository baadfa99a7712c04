"""
Test suite for the Hospital Management System.

Contains unit and integration tests for the services and both HTTP surfaces.
"""
import os

# Set environment for testing
os.environ["TESTING"] = "1"
os.environ.setdefault("SEED_ON_STARTUP", "0")
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")
