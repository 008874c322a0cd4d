"""
Transport interface: fan an event out to every subscriber of the presentation channel
"""
from abc import ABC, abstractmethod
from typing import Any, Dict


class Transport(ABC):
    """Broadcast binding selected at startup (WebSocket relay or hosted Pusher channel)"""

    name: str = "transport"

    @abstractmethod
    async def broadcast(self, event: str, payload: Any = None) -> None:
        """
        Send an event to all subscribers

        Args:
            event: Event name (see peerpulse.core.events)
            payload: JSON-serializable payload, None for payload-less events

        Note:
            Errors reaching the transport as a whole are raised to the caller.
            Per-subscriber failures are the binding's concern.
        """

    async def close(self) -> None:
        """Release resources on shutdown"""

    def describe(self) -> Dict[str, Any]:
        return {"transport": self.name}
