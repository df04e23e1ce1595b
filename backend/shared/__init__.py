"""
Shared module for the REST API and the CLI.

STRUCTURE:
- shared.security: Authentication and password hashing
  - auth.py: JWT signing/verification, current_user_context
  - password.py: Bcrypt hashing
  - rate_limit.py: Login rate limiting (slowapi)

- shared.infrastructure: Database and request context
  - db.py: SQLAlchemy engine and sessions, safe_commit()
  - correlation.py: X-Request-ID propagation into logs

- shared.config: Configuration
  - settings.py: Environment config (pydantic-settings)
  - logging.py: Structured logging
  - constants.py: Roles, OrderStatus, Limits

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - validators.py: Business validation, SSRF prevention
  - schemas.py: Pydantic request/response schemas
  - pagination.py: Offset pagination

IMPORT EXAMPLES:
    from shared.security.auth import verify_jwt, current_user_context
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import Roles, OrderStatus
    from shared.utils.exceptions import NotFoundError, ForbiddenError
    from shared.utils.validators import validate_order_lines
"""
