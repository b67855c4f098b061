"""Configuration export/import utilities"""
import yaml
from pathlib import Path
from typing import Optional
from ..core.config import BrevitConfig
from ..exceptions import ConfigurationError
from ..utils.logging import get_logger

logger = get_logger(__name__)


def export_config(config: BrevitConfig, output_path: Optional[Path] = None) -> Path:
    """
    Export configuration to YAML file.

    Args:
        config: Configuration to export
        output_path: Where to save (default: .brevit/config.yaml)

    Returns:
        Path to exported config file
    """
    if output_path is None:
        output_path = Path(".brevit/config.yaml")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = config.model_dump(exclude_none=True, mode='json')

    with output_path.open("w") as f:
        yaml.dump(
            config_dict,
            f,
            default_flow_style=False,
            sort_keys=True,
            indent=2
        )

    logger.info("config_exported", path=str(output_path))
    return output_path


def import_config(config_path: Path) -> BrevitConfig:
    """
    Import configuration from YAML file.

    Args:
        config_path: Path to config YAML file

    Returns:
        BrevitConfig instance

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the file does not hold a YAML mapping
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open() as f:
        config_dict = yaml.safe_load(f)

    if config_dict is None:
        config_dict = {}
    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Expected a mapping in {config_path}, got {type(config_dict).__name__}"
        )

    logger.info("config_loaded", path=str(config_path))
    return BrevitConfig(**config_dict)


def config_diff(config1: BrevitConfig, config2: BrevitConfig) -> dict[str, tuple]:
    """Return {setting: (value1, value2)} for every setting that differs"""
    dict1 = config1.model_dump(exclude_none=True, mode='json')
    dict2 = config2.model_dump(exclude_none=True, mode='json')

    diff = {}
    for key in sorted(set(dict1.keys()) | set(dict2.keys())):
        val1 = dict1.get(key, "(unset)")
        val2 = dict2.get(key, "(unset)")
        if val1 != val2:
            diff[key] = (val1, val2)
    return diff


def print_config_diff(config1: BrevitConfig, config2: BrevitConfig) -> None:
    """Print differences between two configurations"""
    from rich.console import Console
    from rich.table import Table

    console = Console()
    table = Table(title="Configuration Diff")
    table.add_column("Setting", style="cyan")
    table.add_column("Config 1", style="yellow")
    table.add_column("Config 2", style="green")

    for key, (val1, val2) in config_diff(config1, config2).items():
        table.add_row(key, str(val1), str(val2))

    console.print(table)
