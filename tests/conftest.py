"""Test configuration and fixtures for the product catalog."""

import os

# Must be set before src.catalog is imported: the default context loads config.yaml at import
os.environ["APP_ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_FILE"] = ""
os.environ["SEED_SAMPLE_DATA"] = "false"

from tests.fixtures import *  # noqa: E402,F401,F403
