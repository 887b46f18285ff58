"""Per-scenario authentication state.

A fresh AuthContext is built for every test, so a token set in one
scenario can never leak into the next.
"""

import inspect
from typing import Optional

from e2e_harness.protocols import RefreshHook


class AuthContext:
    """Bearer token plus an optional refresh hook, owned by one scenario."""

    def __init__(
        self,
        token: Optional[str] = None,
        refresh_hook: Optional[RefreshHook] = None,
    ):
        self.token = token
        self.refresh_hook = refresh_hook

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    @property
    def has_refresh_hook(self) -> bool:
        return self.refresh_hook is not None

    def set_token(self, token: Optional[str]) -> None:
        self.token = token

    def set_refresh_hook(self, hook: Optional[RefreshHook]) -> None:
        self.refresh_hook = hook

    def reset(self) -> None:
        """Drop the token. The refresh hook is left as is."""
        self.token = None

    def authorization_header(self) -> Optional[str]:
        if not self.token:
            return None
        return f"Bearer {self.token}"

    async def refresh(self) -> None:
        """Run the refresh hook, awaiting it when it returns an awaitable."""
        if self.refresh_hook is None:
            return
        result = self.refresh_hook()
        if inspect.isawaitable(result):
            await result

    def __repr__(self) -> str:
        return (
            f"AuthContext(token={'set' if self.token else 'empty'}, "
            f"refresh_hook={'registered' if self.refresh_hook else 'none'})"
        )


__all__ = ["AuthContext"]
