"""
Gestor Bootstrap - Startup Errors
===================================
Raised when the application cannot be wired safely.
"""


class SystemBootstrapError(Exception):
    """
    Raised when a startup invariant is violated.

    The application must not start; there is no fallback mode.
    """

    def __init__(self, invariant: str, detail: str):
        self.invariant = invariant
        self.detail = detail
        super().__init__(f"GESTOR BOOTSTRAP FAILURE - {invariant}: {detail}")
