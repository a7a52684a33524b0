"""
Pydantic schema definitions for API payloads.

Each domain (clients, vehicles, workers, service records) defines its
own Pydantic models for request and response bodies.  Schemas are
separated from the database rows to decouple API representation from
persistence.
"""
