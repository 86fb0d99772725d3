"""
Pydantic schema definitions for exchanges and API payloads.

``entry`` holds the value types (stages, entries and votes) shared by
the persisted exchange record and the request bodies; ``exchange``
holds the aggregate itself together with its read views; ``submission``
and ``vote`` hold the request bodies of the participant commands.
"""
