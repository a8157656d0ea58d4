"""fluentform exception hierarchy.

The rendering path never raises: misses and unmappable constraints degrade
to "no client-side rules". Errors exist only for configuration mistakes
that should surface at startup.
"""


class FluentFormError(Exception):
    """Base for all fluentform-specific errors."""


class ConfigurationError(FluentFormError):
    """Raised when the registry or engine configuration is invalid.

    Typically raised while registering validators or constructing
    ``FluentConfig``, before the first form is rendered.
    """
