from typing import Any, Protocol


class ReporterProtocol(Protocol):
    """Sink the host supplies for diagnostics. Fire-and-forget."""

    def error(self, node: Any, rule_id: str, message: str) -> None:
        ...
