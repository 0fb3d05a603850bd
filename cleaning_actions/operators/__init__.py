# =============================================================================
# cleaning_actions/operators - All Action Operators
# =============================================================================
# This package contains every operator, organized by category.
#
# Categories:
#   - columns: delete, rename, retype and add identifier columns
#   - values: fill missing, replace values, overwrite a column or a row
#   - rows: conditional deletes, duplicates, sorting, limit
#   - fills: statistical fills (mean, median, mode, neighbours, random)
#   - calculate: constant arithmetic, rounding, multi-column folds
#   - dates: separator and date-format changes
#   - text: casing, find/replace, tokenize, encoding, special characters
#
# Import all operator modules here to register them with the global registry.
# =============================================================================

from cleaning_actions.operators import columns
from cleaning_actions.operators import values
from cleaning_actions.operators import rows
from cleaning_actions.operators import fills
from cleaning_actions.operators import calculate
from cleaning_actions.operators import dates
from cleaning_actions.operators import text
