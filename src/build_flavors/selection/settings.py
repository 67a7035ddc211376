"""Selection input: where the requested flavor name comes from.

Precedence, highest first:

1. ``--flavor NAME`` on the command line
2. ``-P flavor=NAME`` project property on the command line
3. ``FLAVOR`` environment variable
4. ``flavor=NAME`` in the properties file
5. The registry's default flavor
"""

from pathlib import Path
from typing import Iterable

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from build_flavors.utils.helpers import parse_properties

FLAVOR_PROPERTY = "flavor"
DEFAULT_PROPERTIES_FILE = "flavor.properties"


class SelectionSettings(BaseSettings):
    """Selection environment read from env vars and the properties file."""

    model_config = SettingsConfigDict(
        env_file=DEFAULT_PROPERTIES_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    flavor: str | None = Field(default=None, description="Requested flavor name")


def read_selection(
    flavor_option: str | None = None,
    properties: Iterable[str] = (),
    properties_file: Path | str | None = None,
) -> str | None:
    """Read the requested flavor name once.

    Args:
        flavor_option: Value of an explicit ``--flavor`` option
        properties: ``key=value`` project properties from the command line
        properties_file: Properties file to fall back to

    Returns:
        The requested name, or None when no source supplies one
    """
    if flavor_option is not None:
        return flavor_option

    cli_properties = parse_properties(properties)
    if FLAVOR_PROPERTY in cli_properties:
        return cli_properties[FLAVOR_PROPERTY]

    env_file = Path(properties_file) if properties_file is not None else Path(DEFAULT_PROPERTIES_FILE)
    settings = SelectionSettings(_env_file=env_file)
    return settings.flavor
