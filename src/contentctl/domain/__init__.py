"""Domain layer — content types, schemas, records, and errors.

This layer depends only on stdlib, pydantic, and ruamel.yaml.
It must never import from services, infrastructure, commands, or config.
"""
