"""YAML loading and parsing for scenario files."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from .errors import ScenarioLoadError, ScenarioValidationError
from .models import Scenario


def load_yaml(path: str | Path) -> dict:
    """Load a YAML file and return the raw data.

    Args:
        path: Path to the YAML file.

    Returns:
        The parsed YAML data as a dictionary.

    Raises:
        ScenarioLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)

    if not path.exists():
        raise ScenarioLoadError(f"File not found: {path}", str(path))

    if not path.is_file():
        raise ScenarioLoadError(f"Not a file: {path}", str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ScenarioLoadError(f"Invalid YAML: {e}", str(path)) from e
    except OSError as e:
        raise ScenarioLoadError(f"Cannot read file: {e}", str(path)) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ScenarioLoadError(
            f"Expected YAML mapping at root, got {type(data).__name__}", str(path)
        )

    return data


def parse_scenario(path: str | Path) -> Scenario:
    """Load and parse a YAML file into a Scenario.

    Raises:
        ScenarioLoadError: If the file cannot be read or parsed.
        ScenarioValidationError: If the data fails validation.
    """
    data = load_yaml(path)
    return _parse_scenario_data(data)


def parse_scenario_from_string(yaml_string: str) -> Scenario:
    """Parse a YAML string into a Scenario.

    Raises:
        ScenarioLoadError: If the YAML cannot be parsed.
        ScenarioValidationError: If the data fails validation.
    """
    try:
        data = yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        raise ScenarioLoadError(f"Invalid YAML: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ScenarioLoadError(f"Expected YAML mapping at root, got {type(data).__name__}")

    return _parse_scenario_data(data)


def _parse_scenario_data(data: dict) -> Scenario:
    try:
        return Scenario.model_validate(data)
    except ValidationError as e:
        raise ScenarioValidationError(
            f"Scenario validation failed with {e.error_count()} error(s)",
            validation_error_dicts(e),
        ) from e


def validation_error_dicts(error: ValidationError) -> list[dict]:
    """Flatten pydantic errors into loc/msg/type dicts."""
    return [
        {
            "loc": ".".join(str(x) for x in err["loc"]),
            "msg": err["msg"],
            "type": err["type"],
        }
        for err in error.errors()
    ]
