"""Pure domain code: client-id parsing and folder/branch types.

Nothing in here knows about FastAPI or the backend transport, so it can be
unit-tested directly and shared with the smoke runner.
"""
__all__ = ["client_id", "folders"]
