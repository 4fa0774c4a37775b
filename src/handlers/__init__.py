"""
Callable function handlers.

Each handler takes the Caller (or None) and the request payload and either
returns a JSON-serializable result or raises a HandlerError.
"""
