# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the cleaning service:
# - test_coercion.py / test_schema.py: Value and schema helpers
# - test_operators_*.py: One module per operator family
# - test_engine.py: Dispatch, audit trail and batch scenarios
# - test_action_planner.py / test_chat_handler.py: OpenAI agents (mocked)
# - test_api.py: HTTP endpoints through FastAPI's TestClient
#
# Run tests with: pytest
# =============================================================================
