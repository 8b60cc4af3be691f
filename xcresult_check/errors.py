"""Errors raised while reading result bundles."""


class MalformedDocumentError(Exception):
    """Raised when xcresulttool output cannot be turned into any result."""


class XcResultToolError(Exception):
    """Raised when an xcresulttool invocation exits with a failure."""
