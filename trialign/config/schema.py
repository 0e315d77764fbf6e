"""
TriAlign v0.1.0

Configuration schema for TriAlign.

Defines all available configuration parameters with defaults and validation.

Author: TriAlign Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import copy
from typing import Dict, Any, Optional, List
from pathlib import Path
import yaml


REPORT_FORMATS = ['xml', 'json', 'text']
LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
TEMPLATES = ['default', 'anchored']


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Edit Graph
    # ========================================================================
    'graph': {
        'constrain_endpoints': False,  # Tag (0,0,0) START and (n1,n2,n3) END
        'keep_graph_file': True,  # Keep the serialized graph after the run
        'graph_file': None,  # Default: <fasta1>_<fasta2>_<fasta3>.graph.txt
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        'format': 'xml',  # 'xml', 'json', 'text'
        'report_file': None,  # Default: alignment_report.<ext>

        # Logging
        'logging': {
            'level': 'INFO',  # 'DEBUG', 'INFO', 'WARNING', 'ERROR'
            'log_file': 'trialign.log',
        },
    },
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Path to YAML config file (None = use defaults)

    Returns:
        Configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        config_path = Path(config_path)
        if config_path.exists():
            with open(config_path) as f:
                user_config = yaml.safe_load(f)

            if user_config is not None and not isinstance(user_config, dict):
                raise ValueError(f"Config file {config_path} must contain a mapping")
            if user_config:
                config = deep_merge(config, user_config)

    return config


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary (wins on conflicts)

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def save_config_template(output_path: Path, template: str = 'default'):
    """
    Save a configuration template to file.

    Args:
        output_path: Output file path
        template: Template type ('default', 'anchored')
    """
    if template not in TEMPLATES:
        raise ValueError(f"Unknown template: {template}")

    config = copy.deepcopy(DEFAULT_CONFIG)

    # Global alignment: path pinned to both graph corners
    if template == 'anchored':
        config['graph']['constrain_endpoints'] = True

    with open(output_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not isinstance(config, dict):
        return [f"Configuration must be a mapping, got {type(config).__name__}"]

    graph = config.get('graph', {})
    if not isinstance(graph, dict):
        errors.append(f"graph must be a mapping, got {type(graph).__name__}")
    else:
        for flag in ('constrain_endpoints', 'keep_graph_file'):
            if not isinstance(graph.get(flag, False), bool):
                errors.append(f"graph.{flag} must be true or false")

    output = config.get('output', {})
    if not isinstance(output, dict):
        errors.append(f"output must be a mapping, got {type(output).__name__}")
        return errors

    fmt = output.get('format', 'xml')
    if fmt not in REPORT_FORMATS:
        errors.append(f"Invalid output format: {fmt} (expected one of {', '.join(REPORT_FORMATS)})")

    logging_config = output.get('logging', {})
    if not isinstance(logging_config, dict):
        errors.append(f"output.logging must be a mapping, got {type(logging_config).__name__}")
    else:
        level = logging_config.get('level', 'INFO')
        if str(level).upper() not in LOG_LEVELS:
            errors.append(f"Invalid logging level: {level}")

    return errors
