"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from dagiter._errors import ConfigError
from dagiter._modes import SiblingOrder, TraversalMode


@dataclass(slots=True, frozen=True)
class DagIterConfig:
    """Defaults for the CLI loaded from ``[tool.dagiter]``.

    Fields left unset in the file keep the library defaults.
    """

    mode: TraversalMode = TraversalMode.DFS
    sibling_order: SiblingOrder = SiblingOrder.CHILD_COUNT
    check_cycles: bool = False


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def _parse_choice[E: (TraversalMode, SiblingOrder)](value: object, enum_type: type[E], key: str) -> E:
    if not isinstance(value, str):
        msg = f"Invalid [tool.dagiter].{key}: expected string"
        raise ConfigError(msg)
    try:
        return enum_type(value.lower())
    except ValueError:
        choices = ", ".join(repr(member.value) for member in enum_type)
        msg = f"Invalid [tool.dagiter].{key} '{value}'. Expected one of: {choices}"
        raise ConfigError(msg) from None


def load_config(pyproject_path: Path) -> DagIterConfig:
    """Load and validate [tool.dagiter] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed DagIterConfig

    Raises:
        ConfigError: If the configuration is invalid

    """

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("dagiter", {})
    if not section:
        return DagIterConfig()

    unknown = set(section) - {"mode", "sibling-order", "check-cycles"}
    if unknown:
        msg = f"Unknown [tool.dagiter] keys: {', '.join(sorted(unknown))}"
        raise ConfigError(msg)

    mode = TraversalMode.DFS
    if "mode" in section:
        mode = _parse_choice(section["mode"], TraversalMode, "mode")

    sibling_order = SiblingOrder.CHILD_COUNT
    if "sibling-order" in section:
        sibling_order = _parse_choice(section["sibling-order"], SiblingOrder, "sibling-order")

    check_cycles = section.get("check-cycles", False)
    if not isinstance(check_cycles, bool):
        msg = "Invalid [tool.dagiter].check-cycles: expected boolean"
        raise ConfigError(msg)

    return DagIterConfig(
        mode=mode,
        sibling_order=sibling_order,
        check_cycles=check_cycles,
    )


def get_config() -> DagIterConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        DagIterConfig (defaults if no pyproject.toml or no [tool.dagiter] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return DagIterConfig()
    return load_config(pyproject_path)
