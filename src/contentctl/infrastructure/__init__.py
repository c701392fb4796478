"""Infrastructure layer: file store, markup rendering, cache, repository.

Bridges the pure domain layer to the filesystem and third-party renderers.
It must never import from services, commands, or output.
"""
