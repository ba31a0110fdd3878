from .base import (
    BusinessRuleError,
    DatabaseError,
    DatabaseFaultError,
    ErrorSource,
    InvalidInputError,
    InvalidOperationError,
    NotFoundError,
    RepositoryError,
    UnexpectedError,
)
from .error_classifier import (
    ConstraintKind,
    DatabaseErrorDetails,
    RaisedDatabaseError,
    classify_constraint,
    extract_error_details,
)
from .mapper import ErrorTranslator, db_error_handler

# medshop/
# ├── exceptions/
# │   ├── base.py              # App-level errors + wire payloads
# │   ├── error_classifier.py  # Driver-specific number/message extraction
# │   └── mapper.py            # ErrorTranslator + db_error_handler
