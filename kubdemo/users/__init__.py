"""
Users service.

Lets people sign up with an email address and password, and log in to get a
bearer token. Password hashing and token issuance are delegated to the auth
service; this service only remembers who has signed up. Users are held in
memory, so they are lost when the pod restarts.
"""
