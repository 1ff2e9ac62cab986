"""HTTP status codes used by the services."""

HTTP_200_OK = 200
HTTP_201_CREATED = 201
HTTP_401_UNAUTHORIZED = 401


def is_success(code: int) -> bool:
    """Whether ``code`` is a 2xx status."""
    return 200 <= code <= 299
