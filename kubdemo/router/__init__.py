"""
Edge router.

Stands in front of the services the way the cluster ingress does. Each
incoming path is matched against an ordered list of rules; the first rule
that matches picks the backend and rewrites the path with its capture
groups, and the request is proxied there. The rules mirror the ingress
annotations::

    /auth(/|$)(.*)   -> auth service,  rewritten to /$2
    /users(/|$)(.*)  -> users service, rewritten to /$2
    /tasks(/|$)(.*)  -> tasks service, rewritten to /$2
    /(.*)            -> frontend,      rewritten to /$1

Only the first path segment is stripped. So the tasks API, which serves
``/tasks``, has to be called as ``/tasks/tasks`` from outside, and a bare
``/tasks`` reaches the tasks service as ``/``.
"""
