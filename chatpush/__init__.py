"""Push notification lifecycle handling for chat clients.

``domain`` holds entities, errors and collaborator protocols. ``application``
holds the lifecycle manager and the demo backend use cases. ``infrastructure``
provides the stores, the event bus and the push adapters, and ``interfaces``
the FastAPI demo backend.
"""

__version__ = "1.0.0"
