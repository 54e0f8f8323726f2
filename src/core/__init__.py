"""Core package - Flow conversation logic and request orchestration."""

from src.core.errors import (
    EnvelopeInvalid,
    FlowEndpointError,
    PersistenceFailure,
    ServerMisconfigured,
    SignatureInvalid,
    UnhandledRequest,
    UnhandledScreen,
)

__all__ = [
    "FlowEndpointError",
    "EnvelopeInvalid",
    "PersistenceFailure",
    "ServerMisconfigured",
    "SignatureInvalid",
    "UnhandledRequest",
    "UnhandledScreen",
]
