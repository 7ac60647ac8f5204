"""Unit tests for individual components in isolation.

Coverage:
    - models: Serialization layout and title derivation
    - storage: Key-value stores and the session store
    - clients: PDF pre-check and the HTTP adapters
    - ui: Chat controller state machine

Uses fakes and mock transports for the external services.
"""
