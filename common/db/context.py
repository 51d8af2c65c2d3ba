"""
Database session context.

Holds the session bound to the current transaction so repositories called
inside `transaction()` share one connection, and lets a call chain force
read sessions with `@readonly`.
"""

from contextvars import ContextVar
from functools import wraps
from typing import Optional, Callable, TypeVar, ParamSpec

from sqlalchemy.ext.asyncio import AsyncSession

# Current write session (inside a write transaction)
_write_session: ContextVar[Optional[AsyncSession]] = ContextVar(
    "db_write_session", default=None
)

# Current read session (inside a read transaction)
_read_session: ContextVar[Optional[AsyncSession]] = ContextVar(
    "db_read_session", default=None
)

_force_readonly: ContextVar[bool] = ContextVar("db_force_readonly", default=False)


def is_readonly_forced() -> bool:
    """Check if current context is forced to readonly."""
    return _force_readonly.get()


def get_current_session(readonly: bool = False) -> Optional[AsyncSession]:
    """
    Get the current session from context, if any.

    Args:
        readonly: If True, get read session. If False, get write session.

    Returns:
        The current session if inside a transaction, None otherwise.
    """
    if readonly or is_readonly_forced():
        return _read_session.get()
    return _write_session.get()


def set_current_session(session: AsyncSession, readonly: bool = False) -> object:
    """Bind a session to the context. Returns the token for reset."""
    if readonly:
        return _read_session.set(session)
    return _write_session.set(session)


def reset_current_session(token: object, readonly: bool = False) -> None:
    """Restore the context using a token from set_current_session."""
    if readonly:
        _read_session.reset(token)
    else:
        _write_session.reset(token)


def in_transaction(readonly: bool = False) -> bool:
    return get_current_session(readonly=readonly) is not None


P = ParamSpec("P")
T = TypeVar("T")


def readonly(func: Callable[P, T]) -> Callable[P, T]:
    """
    Force every DB operation in this call chain onto read sessions.

    Usage:
        @readonly
        async def get_status(user_id: int):
            return await subscription_repo.get_by_user_id(user_id)
    """

    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        token = _force_readonly.set(True)
        try:
            return await func(*args, **kwargs)
        finally:
            _force_readonly.reset(token)

    return wrapper
