"""
Service layer.

Each service encapsulates the business rules for one domain and talks
to the database only through the ``EntityStore`` it is constructed
with.  API handlers build a service per request from the injected
store, so the same rules apply whether a service is reached over HTTP
or called directly.
"""
