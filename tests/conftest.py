import os
import sys
from datetime import date, timedelta

import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture
def start_day():
    return date(2024, 3, 1)


@pytest.fixture
def consecutive_days(start_day):
    """Factory returning ``n`` consecutive dates beginning at ``start_day``."""
    def make(n):
        return [start_day + timedelta(days=i) for i in range(n)]
    return make


# Prevent pytest from attempting to collect any modules inside the engine
# package itself.

def pytest_ignore_collect(collection_path, config):
    text = str(collection_path)
    if os.path.sep + 'engine' + os.path.sep in text:
        return True
