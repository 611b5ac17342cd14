class RoutingError(Exception):
    """Base class for every error raised by pyroute."""


class PatternError(RoutingError, ValueError):
    """A route template could not be compiled."""

    def __init__(self, pattern, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"invalid route pattern {pattern!r}: {reason}")


class MatchTypeError(RoutingError, TypeError):
    """Something other than a template string or a compiled regex was used as a pattern."""

    def __init__(self, value):
        self.value = value
        super().__init__(
            f"route pattern must be a str or re.Pattern, got {type(value).__name__}"
        )


class HostUnavailableError(RoutingError, RuntimeError):
    """No host history is attached and the router is not in SSR mode."""
