"""Domain layer: travel types, dates, codecs, and derivations.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
