"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
These are protocol constraints of the remote catalog service.

For configurable values, see models.py (ApiConfig, NavigationConfig).
"""

# =============================================================================
# Remote Service Routes
# =============================================================================

API_ROUTE_PREFIX = "api"
"""Leading path segment of every resource route."""

LIST_SEGMENT = "List"
INTERMEDIATE_SEGMENT = "Intermediate"
SIMPLE_SEGMENT = "Simple"
"""Sub-resource segments for the Record, Intermediate and Simple projections."""

REQUEST_ID_HEADER = "X-Request-Id"
"""Header carrying the logging correlation id."""

# =============================================================================
# Protocol/Validation Constants
# =============================================================================

TIMEOUT_MAX_SEC = 600.0
"""Upper bound for the per-request timeout."""
