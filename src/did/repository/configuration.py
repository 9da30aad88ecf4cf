# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Optional

from yaml import YAMLError, load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]

from did import configuration
from did.errors import ConfigurationError, StorageError

log = logging.getLogger(__name__)


class ConfigurationRepository:
    def __init__(self, config_path: Optional[Path] = None) -> None:
        self.config_path = (
            config_path if config_path is not None else configuration.APP_CONFIG_PATH
        )
        self._config: Optional[configuration.Configuration] = None

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        if not self.config_path.is_file():
            # No file is fine; every setting has a default
            log.debug("no configuration at %s, using defaults", self.config_path)
            self._config = configuration.get_default_configuration()
            return

        try:
            raw_config = load(self.config_path.read_text(), Loader=Loader)
        except YAMLError as e:
            raise ConfigurationError(
                f"failed to parse configuration file: {e}", self.config_path
            ) from e
        except OSError as e:
            raise StorageError(
                f"failed to read configuration file {self.config_path}: {e}",
                self.config_path,
            ) from e

        self._config = configuration.validate_configuration(
            raw_config, self.config_path
        )

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def write_sample_config(self, overwrite: bool = False) -> bool:
        """Create a commented sample file. Returns False if one already exists."""
        if self.config_path.exists() and not overwrite:
            return False
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            self.config_path.write_text(configuration.SAMPLE_CONFIGURATION)
        except OSError as e:
            raise StorageError(
                f"failed to write configuration file {self.config_path}: {e}",
                self.config_path,
            ) from e
        self._config = None
        return True
