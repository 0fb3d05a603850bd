# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - actions.py: Action catalogue and direct action application
# - chat.py: Conversational cleaning (command -> actions -> new dataset)
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import actions
from . import chat

__all__ = [
    "health",
    "actions",
    "chat",
]
