"""Abstract base class for credential providers.

This module defines :class:`CredentialProvider`, the capability every
authentication strategy implements.  Callers hold a reference to this
interface and never special-case a concrete provider.

To implement a new strategy, subclass :class:`CredentialProvider`, set the
:attr:`~CredentialProvider.method_name` property, and implement
:meth:`~CredentialProvider.acquire`.

See Also:
    :mod:`azcred.auth.manager` for provider registration and selection.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Optional

from azcred.models import Credentials


class CredentialProvider(ABC):
    """Abstract base class for credential providers.

    Every concrete strategy must provide:

    1. A :attr:`method_name` property returning a static, human-readable
       description (e.g. ``"Device Code Flow"``).
    2. An :meth:`acquire` coroutine that returns
       :class:`~azcred.models.Credentials` or raises
       :class:`~azcred.exceptions.AuthError`.

    Providers are immutable after construction; any per-call state lives
    inside :meth:`acquire`, so one provider may serve concurrent calls.
    """

    @property
    @abstractmethod
    def method_name(self) -> str:
        """Return the human-readable name of this strategy."""
        ...

    @abstractmethod
    async def acquire(self, cancel: Optional[asyncio.Event] = None) -> Credentials:
        """Obtain credentials.

        Args:
            cancel: Optional event.  Providers that suspend (sleep or
                network I/O) abandon the flow when it is set.

        Returns:
            The acquired :class:`~azcred.models.Credentials`.

        Raises:
            AuthError: On any failure.  Nothing is swallowed.
        """
        ...

    def acquire_blocking(self) -> Credentials:
        """Run :meth:`acquire` to completion on a fresh event loop.

        For synchronous callers only; raises :class:`RuntimeError` when
        invoked from inside a running event loop.
        """
        return asyncio.run(self.acquire())

    def __repr__(self) -> str:
        return f"<{type(self).__name__} method={self.method_name!r}>"
