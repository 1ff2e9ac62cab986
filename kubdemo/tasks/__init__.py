"""
Tasks service.

Stores short text tasks for authenticated callers and lists them back. Every
request must carry an ``Authorization: Bearer <token>`` header; the token is
checked against the auth service (``GET /verify-token/<token>``) before the
task store is touched. Tasks are appended to a JSON Lines file under
``TASKS_FOLDER``, which is expected to be a mounted volume in a cluster
deployment.
"""
