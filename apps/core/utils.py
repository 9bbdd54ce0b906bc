"""
Core helpers shared by the middleware and the API exception handler.
"""


def error_payload(status_code: int, detail, **extra) -> dict:
    """
    Build the error envelope every API failure is returned in.

    Args:
        status_code: HTTP status of the response.
        detail: Human-readable message, or DRF's field -> errors mapping.
        **extra: Additional keys such as ``code`` or ``field``.

    Returns:
        Dict of the form {'error': True, 'status_code': ..., 'detail': ...}.
    """
    payload = {
        'error': True,
        'status_code': status_code,
        'detail': detail,
    }
    payload.update(extra)
    return payload
