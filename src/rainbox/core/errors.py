class RainBoxError(Exception):
    """Base class for everything raised by the rain simulation."""


class LandscapeParseError(RainBoxError, ValueError):
    """A token of the landscape field is not a number."""

    def __init__(self, token, cause):
        self.token = token
        self.cause = cause
        super().__init__(f"Cannot parse '{token}' as number: {cause}")


class SchedulerError(RainBoxError):
    pass


class WorldFinishedError(RainBoxError):
    pass


class SolverContractError(RainBoxError):
    pass
