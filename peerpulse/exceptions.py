"""
Domain errors raised by the core and translated to HTTP status codes by the routers
"""


class UnknownEventError(ValueError):
    """Event name is not part of the broadcast contract"""

    def __init__(self, event: str):
        super().__init__(f"Invalid event type: {event}")
        self.event = event


class InvalidTransitionError(Exception):
    """Lifecycle event does not follow the current presentation status"""

    def __init__(self, event: str, status: str):
        super().__init__(f"Cannot apply {event} while presentation is {status}")
        self.event = event
        self.status = status


class TransportNotConfiguredError(RuntimeError):
    """Operation needs a transport binding the server was not started with"""
