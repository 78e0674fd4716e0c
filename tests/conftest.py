"""Root pytest configuration for all tests.

This conftest applies to all test types (unit and integration).
"""

import logging

# Keep connection pool chatter of requests out of captured logs
logging.getLogger("urllib3").setLevel(logging.WARNING)
