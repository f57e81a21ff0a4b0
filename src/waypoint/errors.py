# SPDX-License-Identifier: MIT


class WaypointError(Exception):
    pass


class NotFoundError(WaypointError):
    """An entity id is absent from its collection."""

    def __init__(self, label: str, id: str) -> None:
        super().__init__(f"{label} not found")
        self.label = label
        self.id = id


class RemoteError(WaypointError):
    """Transport or authentication failure talking to the remote store."""


class SerializationError(WaypointError):
    """A cached or remote blob could not be turned into an entity."""


class IdGenerationError(WaypointError):
    pass
