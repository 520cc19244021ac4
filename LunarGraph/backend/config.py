import os
import yaml
import logging
import argparse
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(os.getenv("LUNARGRAPH_CONFIG", "lunargraph_config.yaml"))

DEFAULTS = {
    "device": "cpu",
    "dtype": "float32",
    "seed": 997,
    "init": "xavier",
    "log_level": "WARNING",
}

def load_yaml_config(path: str = None) -> dict:
    """Load configuration from a YAML file."""
    cfg_path = Path(path or os.getenv("LUNARGRAPH_CONFIG", DEFAULT_CONFIG_PATH))
    if not cfg_path.exists():
        logger.debug("No config found at %s. Using defaults.", cfg_path)
        return {}
    with open(cfg_path, "r") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Config file {cfg_path} must contain a mapping, got {type(cfg).__name__}")
    return cfg

def parse_cli_args(argv=None) -> dict:
    """Parse CLI overrides (used for runtime config tweaking)."""
    parser = argparse.ArgumentParser(description="LunarGraph Config Override", add_help=False, allow_abbrev=False)

    parser.add_argument("--config", type=str, help="Path to YAML config file")
    parser.add_argument("--device", type=str, choices=["cpu", "gpu"], help="Device to use")
    parser.add_argument("--dtype", type=str, choices=["float32", "float64"], help="Floating point precision")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--init", type=str, help="Default weight initializer")
    parser.add_argument("--log_level", type=str, help="Logging level for the LunarGraph logger")

    args, _ = parser.parse_known_args(argv)

    return {key: value for key, value in vars(args).items() if value is not None}

def merge_configs(base: dict, override: dict) -> dict:
    """Merge CLI overrides into YAML base config (CLI wins)."""
    final = base.copy()
    final.update(override)
    return final

def load_config(argv=None) -> dict:
    """Main config loader: defaults + YAML + CLI overrides."""
    cli = parse_cli_args(argv)
    yaml_cfg = load_yaml_config(cli.get("config"))
    return merge_configs(merge_configs(DEFAULTS, yaml_cfg), cli)

def resolve_log_level(value) -> int:
    """Turn a configured log level (name or number) into a logging level, WARNING if unknown."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    name = str(value).strip().upper()
    if name.isdigit():
        return int(name)
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    logger.warning("Unknown log_level %r; using WARNING.", value)
    return logging.WARNING

# === The global CONFIG dict you import elsewhere ===
CONFIG = load_config()
