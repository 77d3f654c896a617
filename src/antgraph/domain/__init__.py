"""Domain layer — types, errors, and pure geometry.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""
