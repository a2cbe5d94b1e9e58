# Configuration loading and validation (YAML file + command-line overrides)

import copy
import logging

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "target": None,
    "mutation": {"probability": 0.05},
    "population": {"size": 100, "filler": "A"},
    "seed": None,
    "max_generations": None,
    "reporting": [{"type": "console", "interval": 1}],
}


def load_config(path):
    """Reads a YAML configuration file into a dictionary."""
    with open(path, 'r') as f:
        conf = yaml.safe_load(f)
    if conf is None:
        return {}
    if not isinstance(conf, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(conf).__name__}")
    return conf


def build_config(conf=None, target=None, probability=None, population_size=None,
                 seed=None, max_generations=None):
    """
    Merges the defaults, a loaded config dictionary and explicit
    overrides (None means "not given"), then validates the result.
    """
    merged = copy.deepcopy(DEFAULT_CONFIG)
    conf = conf or {}

    for key in ("target", "seed", "max_generations", "reporting"):
        if key in conf:
            merged[key] = conf[key]
    for section in ("mutation", "population"):
        values = conf.get(section) or {}
        if not isinstance(values, dict):
            raise ValueError(f"'{section}' must be a mapping, got {values!r}")
        merged[section].update(values)

    if target is not None:
        merged["target"] = target
    if probability is not None:
        merged["mutation"]["probability"] = probability
    if population_size is not None:
        merged["population"]["size"] = population_size
    if seed is not None:
        merged["seed"] = seed
    if max_generations is not None:
        merged["max_generations"] = max_generations

    validate_config(merged)
    logger.info("Resolved configuration: %s", merged)
    return merged


def validate_config(conf):
    target = conf.get("target")
    if not isinstance(target, str) or len(target) == 0:
        raise ValueError("A non-empty target string is required.")
    conf["target"] = target.upper()

    try:
        probability = float(conf["mutation"]["probability"])
    except (TypeError, ValueError):
        raise ValueError(f"Mutation probability must be a number, got {conf['mutation']['probability']!r}")
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"Mutation probability must be in [0, 1], got {probability}")
    conf["mutation"]["probability"] = probability

    size = conf["population"]["size"]
    if isinstance(size, bool) or not isinstance(size, int) or size < 1:
        raise ValueError(f"Population size must be a positive integer, got {size!r}")
    if size < 2:
        logger.warning("Population size 1 never mutates: candidate 0 is always kept as is")

    max_generations = conf.get("max_generations")
    if max_generations is not None and (isinstance(max_generations, bool) or not isinstance(max_generations, int) or max_generations < 0):
        raise ValueError(f"max_generations must be a non-negative integer, got {max_generations!r}")

    seed = conf.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int) or seed < 0):
        raise ValueError(f"Seed must be a non-negative integer, got {seed!r}")

    filler = conf["population"].get("filler")
    if not isinstance(filler, str) or len(filler) != 1:
        raise ValueError(f"Filler must be a single character, got {filler!r}")

    if not isinstance(conf.get("reporting"), list):
        raise ValueError("'reporting' must be a list of reporter entries.")
    for entry in conf["reporting"]:
        validate_reporter_entry(entry)
    return conf


def validate_reporter_entry(entry):
    if not isinstance(entry, dict) or not isinstance(entry.get("type"), str):
        raise ValueError(f"Reporter entry needs a string 'type': {entry!r}")
    interval = entry.get("interval", 1)
    if isinstance(interval, bool) or not isinstance(interval, int) or interval < 1:
        raise ValueError(f"Reporter interval must be a positive integer, got {interval!r}")
    if not isinstance(entry.get("params", {}), dict):
        raise ValueError(f"Reporter params must be a mapping, got {entry['params']!r}")
