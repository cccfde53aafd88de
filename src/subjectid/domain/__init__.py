"""Domain layer — identifier formats, value types, and the wire codec.

This layer depends only on stdlib and pydantic.
It must never import from services, commands, config, or output.
"""
