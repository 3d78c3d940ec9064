import yaml, click
from pathlib import Path

# Keys a config file may set, named after the detat command parameters.
CONFIG_KEYS = {
    "allow_binary",
    "json_output",
    "show_stats",
    "confidence_min",
    "fallback_encoding",
    "decoder_trap",
    "verbose",
}

# Friendlier spellings accepted in the config file
KEY_ALIASES = {
    "json": "json_output",
    "stat": "show_stats",
    "fallback": "fallback_encoding",
}


def load_config(config_path) -> dict:
    """
    Read option defaults from a YAML file.

    Args:
        config_path (str): The path to the config file

    Returns:
        A dict usable as a click default_map. Keys may be written
        with dashes or underscores.
    """
    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f) or {}
    except OSError as exc:
        raise click.FileError(str(config_path), hint=exc.strerror) from exc
    except yaml.YAMLError as exc:
        raise click.UsageError(f"Invalid config file {config_path}: {exc}") from exc

    if not isinstance(config, dict):
        raise click.UsageError(
            f"Config file {config_path} must contain a mapping of options."
        )

    defaults = {}
    for key, value in config.items():
        name = str(key).replace("-", "_")
        name = KEY_ALIASES.get(name, name)
        if name not in CONFIG_KEYS:
            raise click.UsageError(
                f"Unknown option '{key}' in config file {Path(config_path).name}."
            )
        defaults[name] = value

    return defaults


def apply_config(ctx: click.Context, param: click.Parameter, value):
    """Eager click callback that turns --config into the context default_map."""
    if value:
        defaults = dict(ctx.default_map or {})
        defaults.update(load_config(value))
        ctx.default_map = defaults
    return value
