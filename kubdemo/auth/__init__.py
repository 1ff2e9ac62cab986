"""
Auth service.

Verifies bearer tokens on behalf of the other services
(``GET /verify-token/<token>``), hashes passwords for the users service, and
issues opaque tokens when a password matches its hash. Tokens carry no
claims and never expire; they are only meaningful to this service.
"""
