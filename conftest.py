import os
import sys

import pytest

# Make the Django project under backend/ importable when running `pytest` from the repo root
BACKEND_DIR = os.path.join(os.path.dirname(__file__), 'backend')
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)


@pytest.fixture(autouse=True)
def _isolated_cache():
    """Cached category lists must not leak between tests sharing the locmem cache."""
    from django.core.cache import cache

    cache.clear()
    yield
    cache.clear()
