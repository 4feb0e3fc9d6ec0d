"""whenx exception hierarchy. Only strict models raise these."""


class WhenxError(Exception):
    """Base class for all whenx exceptions."""


class UnknownPropertyError(WhenxError, KeyError):
    """Raised by a strict model for a property it was not constructed with."""

    def __init__(self, name):
        """Initialize the exception.

        Args:
            name: The property name that is not part of the model.
        """
        self.name = name
        super().__init__(f"Unknown property {name!r}.")

    def __str__(self) -> str:
        return self.args[0]


class UnknownListenerError(WhenxError, ValueError):
    """Raised by a strict model when removing a listener that is not registered."""

    def __init__(self, listener, name=None):
        """Initialize the exception.

        Args:
            listener: The listener or trigger handle that was not found.
            name: The property it was looked up on, or None for every property.
        """
        self.listener = listener
        self.name = name
        where = f"property {name!r}" if name is not None else "any property"
        super().__init__(f"Listener {listener!r} is not registered on {where}.")
