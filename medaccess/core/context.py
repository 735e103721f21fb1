# medaccess/core/context.py

import contextvars

correlation_id_ctx = contextvars.ContextVar("correlation_id", default=None)
principal_id_ctx = contextvars.ContextVar("principal_id", default=None)
