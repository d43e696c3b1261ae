"""
Test suite for MediBook.

Contains unit and integration tests for the application's functionality.
"""
import os

# Set environment for testing before the application settings are loaded
os.environ["TESTING"] = "1"
os.environ["TEST_DATABASE_URL"] = "sqlite:///./test.db"
os.environ["RATE_LIMIT_ENABLED"] = "0"
os.environ["NOTIFICATION_BACKEND"] = "log"
