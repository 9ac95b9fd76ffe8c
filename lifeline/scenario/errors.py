"""Scenario-related exceptions."""


class ScenarioLoadError(Exception):
    """Raised when a scenario file cannot be read or parsed as YAML."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class ScenarioValidationError(Exception):
    """Raised when scenario data does not match the scenario schema."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)
