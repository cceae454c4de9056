# dlock/core/context.py

import contextvars

lock_key_ctx = contextvars.ContextVar("lock_key", default=None)
