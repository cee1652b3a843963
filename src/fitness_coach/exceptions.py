"""Exceptions raised by the fitness coach engine."""


class CoachEngineError(Exception):
    """Base class for engine errors."""


class InvalidStateError(CoachEngineError):
    """A session lifecycle operation was not allowed in the session's current state."""


class CollaboratorError(CoachEngineError):
    """An external collaborator (program source, coaching service) returned an error."""
