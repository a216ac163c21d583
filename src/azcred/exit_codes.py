"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~azcred.exceptions.AzcredError` subclass.  A host
application that surfaces credential failures on the command line can
hand ``exc.exit_code`` straight to :func:`sys.exit`.

Example::

    $ my-tool chat --auth device_code
    $ echo $?
    3   # EXIT_AUTH_FAILURE -- the device code expired
"""

EXIT_SUCCESS = 0
"""Credentials were acquired successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred (including configuration problems)."""

EXIT_AUTH_FAILURE = 3
"""Authentication failed: invalid token, declined, expired, timed out, or rejected."""

EXIT_CANCELLED = 130
"""The flow was cancelled before it could complete (mirrors SIGINT's 128 + 2)."""
