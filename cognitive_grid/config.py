"""
TOML settings for cognitive_grid.

A checkout may hold a local config.toml next to the shipped
config.default.toml; the first one present is parsed once and cached.
Section accessors return plain dicts with the section fallbacks filled in,
so callers index keys directly:

    from cognitive_grid.config import get_world_config
    width = get_world_config()['width']

configs.default_config.get_simulation_config() turns the world, agent and
cognition sections into validated dataclasses.
"""
import tomllib
from pathlib import Path


PROJECT_ROOT = Path(__file__).parent.parent

# Searched in order: local overrides first, shipped defaults second
CONFIG_CANDIDATES = ('config.toml', 'config.default.toml')

# Fallbacks for keys a section may omit. [agent] has none here because
# AgentConfig's own field defaults apply to anything missing.
SECTION_DEFAULTS: dict[str, dict] = {
    'world': {
        'obstacle_density': 0.0,
        'start': [0, 0],
        'obstacles': [],
        'max_steps': 500,
        'seed': None,
    },
    'agent': {},
    'cognition': {
        'noise': 0.0,
        'planning_limit': 0,   # TOML has no null: 0 means unlimited
        'memory_capacity': 0,
        'decay_rate': 1.0,
        'memory_repulsion': 1.0,
        'replan_policy': 'deviation',
    },
    'experiments': {
        'episodes': 50,
        'base_seed': 42,
        'output_dir': 'experiments/data',
        'agents': ['fsm', 'astar', 'behavior_tree'],
    },
    'logging': {
        'level': 'INFO',
        'file': '',
    },
}

# Keys with no sensible fallback
REQUIRED_KEYS: dict[str, tuple[str, ...]] = {
    'world': ('width', 'height'),
}

_config: dict | None = None
_config_path: Path | None = None


def find_config_file() -> Path:
    """Return the first existing file of CONFIG_CANDIDATES under PROJECT_ROOT."""
    for name in CONFIG_CANDIDATES:
        candidate = PROJECT_ROOT / name
        if candidate.exists():
            return candidate
    searched = '\n'.join(f"  {PROJECT_ROOT / name}" for name in CONFIG_CANDIDATES)
    raise FileNotFoundError(f"No config file found. Expected one of:\n{searched}")


def load_config(path: Path | str | None = None) -> dict:
    """
    Parse a TOML file and make it the cached configuration.

    Args:
        path: Explicit file; None picks one with find_config_file()
    """
    global _config, _config_path

    config_path = Path(path) if path is not None else find_config_file()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'rb') as f:
        _config = tomllib.load(f)
    _config_path = config_path
    return _config


def get_config() -> dict:
    """Raw parsed TOML, loading the default file on first use."""
    if _config is None:
        load_config()
    return _config


def get_config_path() -> Path | None:
    return _config_path


def reload_config(path: Path | str | None = None) -> dict:
    """Drop the cache and parse again."""
    global _config
    _config = None
    return load_config(path)


def get_section(name: str) -> dict:
    """
    One TOML section merged over its SECTION_DEFAULTS.

    Raises:
        KeyError: If a key listed in REQUIRED_KEYS is missing
    """
    raw = get_config().get(name, {})
    missing = [key for key in REQUIRED_KEYS.get(name, ()) if key not in raw]
    if missing:
        raise KeyError(f"[{name}] is missing required key(s): {', '.join(missing)}")
    return {**SECTION_DEFAULTS.get(name, {}), **raw}


def get_world_config() -> dict:
    """[world]: grid layout plus the episode step cap and seed."""
    return get_section('world')


def get_agent_config() -> dict:
    """[agent]: energy economy shared by all agent types."""
    return get_section('agent')


def get_cognition_config() -> dict:
    """[cognition]: noise, memory, decay and planning budget."""
    return get_section('cognition')


def get_experiments_config() -> dict:
    """
    [experiments]: batch settings.

    max_steps is only present when the section sets it; otherwise batches
    use [world].max_steps.
    """
    return get_section('experiments')


def get_logging_config() -> dict:
    return get_section('logging')
