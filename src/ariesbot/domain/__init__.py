"""Domain layer — identities, errors, and authorization rules.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, bot, commands, or config.
"""
