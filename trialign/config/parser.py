#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
TriAlign v0.1.0

Configuration parser: YAML config loading, merging and validation.

Author: TriAlign Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import copy
import os
import re
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .schema import DEFAULT_CONFIG, deep_merge, validate_config


# ${VAR} or ${VAR:-default}
_ENV_VAR_PATTERN = re.compile(r'\$\{([^}:]+)(?::-(.*?))?\}')


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


def substitute_env_vars(value: Any) -> Any:
    """
    Recursively expand ${VAR} and ${VAR:-default} in string values.

    Unset variables without a default expand to an empty string.
    """
    if isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [substitute_env_vars(item) for item in value]
    if isinstance(value, str):
        return _ENV_VAR_PATTERN.sub(
            lambda match: os.environ.get(match.group(1), match.group(2) or ''),
            value,
        )
    return value


class ConfigParser:
    """
    Layered TriAlign configuration: defaults < YAML file < CLI overrides.

    Example:
        parser = ConfigParser("run.yaml")
        parser.merge_cli_overrides({'graph.constrain_endpoints': True})
        parser.validate()
        config = parser.pipeline_config("run1", ["a.fa", "b.fa", "c.fa"])
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        self.config_file = Path(config_file) if config_file else None
        self._config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)

        if self.config_file:
            self._config = deep_merge(self._config, self._read_config_file())

    def _read_config_file(self) -> Dict[str, Any]:
        if not self.config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        try:
            with open(self.config_file, 'r') as f:
                user_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(
                f"Invalid YAML in config file {self.config_file}: {e}"
            ) from e

        if user_config is None:
            return {}
        if not isinstance(user_config, dict):
            raise ConfigValidationError(
                f"Config file {self.config_file} must contain a mapping"
            )
        return substitute_env_vars(user_config)

    def merge_cli_overrides(self, overrides: Dict[str, Any]):
        """
        Apply command-line overrides.

        Args:
            overrides: Dotted keys (e.g. 'graph.constrain_endpoints') to
                values. None values are skipped so unset CLI options keep
                the file or default value.

        Raises:
            ConfigValidationError: If a section on the key's path is not a mapping
        """
        for key, value in overrides.items():
            if value is None:
                continue
            *sections, name = key.split('.')
            target = self._config
            for depth, section in enumerate(sections, start=1):
                target = target.setdefault(section, {})
                if not isinstance(target, dict):
                    dotted = '.'.join(sections[:depth])
                    raise ConfigValidationError(
                        f"Cannot set {key}: {dotted} must be a mapping, got {type(target).__name__}"
                    )
            target[name] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key such as 'output.logging.level'."""
        value = self._config
        for k in key.split('.'):
            if not isinstance(value, dict) or k not in value:
                return default
            value = value[k]
        return value

    def get_graph_config(self) -> Dict[str, Any]:
        return self._config.get('graph', {})

    def get_output_config(self) -> Dict[str, Any]:
        return self._config.get('output', {})

    @property
    def constrain_endpoints(self) -> bool:
        return bool(self.get('graph.constrain_endpoints', False))

    @property
    def report_format(self) -> str:
        return self.get('output.format', 'xml')

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as an independent dictionary."""
        return copy.deepcopy(self._config)

    def pipeline_config(self, output_dir: Union[str, Path], sequences: List[Union[str, Path]]) -> Dict[str, Any]:
        """
        Configuration for AlignmentPipeline: this configuration plus the
        run's output directory and its three FASTA inputs.
        """
        config = self.to_dict()
        config['runtime'] = {
            'output_dir': str(output_dir),
            'sequences': [str(s) for s in sequences],
        }
        return config

    def validate(self) -> bool:
        """
        Validate configuration against the schema.

        Raises:
            ConfigValidationError: If validation fails
        """
        errors = validate_config(self._config)
        if errors:
            raise ConfigValidationError("; ".join(errors))
        return True

    def __repr__(self) -> str:
        return f"ConfigParser(config_file={self.config_file})"


# TriAlign v0.1.0
# Any usage is subject to this software's license.
