"""
Repository Configuration

A repository is bound to one entity name and one data provider. The
configuration is validated with pydantic at construction time so a
misconfigured repository fails immediately instead of on first use.
"""

from typing import Any, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import ConfigurationError
from ..providers import DataProvider


class RepositoryConfig(BaseModel):
    """Entity name plus the provider that stores it"""
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    data_provider: DataProvider = Field(alias="dataProvider")

    @classmethod
    def coerce(cls, config: Union["RepositoryConfig", Mapping[str, Any], None]) -> "RepositoryConfig":
        """
        Accept a RepositoryConfig or its mapping form.

        Raises:
            ConfigurationError: if the configuration is missing or invalid
        """
        if isinstance(config, cls):
            return config
        if not isinstance(config, Mapping):
            raise ConfigurationError(f"Invalid repository configuration: {config!r}")

        try:
            return cls.model_validate(dict(config))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid repository configuration: {e}") from e


__all__ = ["RepositoryConfig"]
