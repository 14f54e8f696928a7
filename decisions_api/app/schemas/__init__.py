"""
Pydantic schema definitions for API payloads.

Each domain (decisions, elected officials) defines its own Pydantic
models for request and response bodies.  Schemas are separated from
table rows to decouple API representation from persistence; the
repositories translate between the two.
"""
