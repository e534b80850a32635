"""
Errors raised by upstream HTTP clients.

CHANGELOG:
- 2026-10-18: Initial creation
"""


class UpstreamError(Exception):
    """An upstream service could not be reached or returned unusable data.

    The message is safe to show to API callers.
    """
