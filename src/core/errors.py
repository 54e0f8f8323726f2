"""Flow endpoint errors outside the crypto layer."""


class FlowEndpointError(Exception):
    """Base error for the Flow endpoint."""


class SignatureInvalid(FlowEndpointError):
    """x-hub-signature-256 is missing or does not match."""


class ServerMisconfigured(FlowEndpointError):
    """Private key is missing or unusable."""


class EnvelopeInvalid(FlowEndpointError):
    """Request body is not a complete encrypted envelope."""


class UnhandledScreen(FlowEndpointError):
    """data_exchange received for a screen this endpoint does not serve."""

    def __init__(self, screen: str | None) -> None:
        self.screen = screen
        super().__init__(f"Unhandled screen type: {screen}")


class UnhandledRequest(FlowEndpointError):
    """Action not recognized."""

    def __init__(self, action: str | None) -> None:
        self.action = action
        super().__init__("Unhandled endpoint request.")


class PersistenceFailure(FlowEndpointError):
    """Appointment store call failed."""
