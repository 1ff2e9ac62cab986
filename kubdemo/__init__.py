"""
kub-demo services.

Three small HTTP services (auth, users, tasks) and an edge router, meant to
be deployed side by side on Kubernetes. Each service is a Flask application
with its own app factory:

- :mod:`kubdemo.auth` verifies bearer tokens and issues new ones.
- :mod:`kubdemo.users` handles signup and login.
- :mod:`kubdemo.tasks` stores and lists tasks for authenticated callers.
- :mod:`kubdemo.router` rewrites external paths and proxies them to the
  services above, or to the static frontend.

Shared plumbing (status codes, logging, error handlers) lives in
:mod:`kubdemo.base`.
"""
