"""Standardized Hypothesis settings profiles for property tests.

Usage:
    from tests.property.settings import STANDARD_SETTINGS

    @given(value=st.binary(min_size=20, max_size=20))
    @STANDARD_SETTINGS
    def test_something(value):
        ...

Tiers:
- STANDARD_SETTINGS: 100 examples - Regular property tests
- SLOW_SETTINGS: 50 examples - I/O bound tests (database, file system)
- QUICK_SETTINGS: 20 examples - Fast validation tests (enums, simple rejection)
"""

from hypothesis import settings

STANDARD_SETTINGS = settings(max_examples=100)

# Fewer examples due to inherent slowness
SLOW_SETTINGS = settings(max_examples=50, deadline=None)

QUICK_SETTINGS = settings(max_examples=20)
