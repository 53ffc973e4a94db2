"""Exceptions raised while building forms."""


class FormError(ValueError):
    """Base class for hard form-building failures."""


class InvalidPath(FormError):
    """An attribute path is empty or contains an empty segment."""


class UnsupportedMethod(FormError):
    """An HTTP verb that cannot be submitted or emulated by a form."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Unsupported form method '{method}'")


class AmbiguousResource(FormError):
    """A bound object's URL and verb cannot be inferred automatically.

    Pass an explicit url (and method) in the render options instead.
    """


class MissingOptionsForSelect(FormError):
    """A select field was requested without an option source."""


class UnexpectedOptions(FormError):
    """An option source was given to a field that is not a select."""


class AttributeNotFound(LookupError):
    """A bound object has no attribute for a path segment.

    Soft condition: the value resolver turns it into a missing value.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No attribute '{name}'")
