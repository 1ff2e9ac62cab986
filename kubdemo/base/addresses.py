"""Service address handling."""


def service_url(address: str) -> str:
    """
    Normalize a service address to a base URL without a trailing slash.

    Kubernetes injects peer addresses as bare ``host:port`` pairs (e.g.
    ``AUTH_ADDRESS=auth-service.default:80``), so ``http://`` is assumed when
    no scheme is given.
    """
    address = address.strip()
    if '://' not in address:
        address = f'http://{address}'
    return address.rstrip('/')
