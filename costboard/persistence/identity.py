from __future__ import annotations

from typing import Callable, Optional, Protocol


class IdentityProvider(Protocol):
    def current_user_id(self) -> Optional[str]: ...


class StaticIdentity:
    """Always reports the same user, or nobody when ``user_id`` is empty."""

    def __init__(self, user_id: Optional[str] = None) -> None:
        self.user_id = user_id or None

    def current_user_id(self) -> Optional[str]:
        return self.user_id


class CallableIdentity:
    """Resolves the user lazily, e.g. from the request being served."""

    def __init__(self, resolver: Callable[[], Optional[str]]) -> None:
        self.resolver = resolver

    def current_user_id(self) -> Optional[str]:
        return self.resolver() or None
