# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the HTTP surface of the cleaning service:
# - main.py: App entry point, middleware setup, error handlers
# - config.py: Environment variable loading and settings
# - dependencies.py: Engine and planner injection
# - routers/: API endpoint definitions organized by feature
#
# The app layer is thin - it handles HTTP concerns and delegates
# the work to the cleaning_actions/ and agents/ packages.
# =============================================================================
