"""Config schema for the chance_of_life variant."""

REQUIRED_PARAMS: dict[str, type] = {}

DEFAULTS = {
    "width": 600.0,
    "height": 600.0,
    "margin": 20.0,
    "spawn_offset": 20.0,
    "target_y": 80.0,
    "immune_strength": 30,
    "restart_delay": 120,
    "min_population": 1,
    "max_population": 500,
    "min_vigor": 2.0,
    "max_vigor": 5.0,
    "min_diversity": 0.1,
    "max_diversity": 2.0,
    "min_target_size": 20.0,
    "max_target_size": 80.0,
    "speed_floor": 0.5,
}

OPTIONAL_PARAMS = {
    "width": float,
    "height": float,
    "margin": float,
    "spawn_offset": float,
    "target_y": float,
    "immune_strength": int,
    "restart_delay": int,
    "min_population": int,
    "max_population": int,
    "min_vigor": float,
    "max_vigor": float,
    "min_diversity": float,
    "max_diversity": float,
    "min_target_size": float,
    "max_target_size": float,
    "speed_floor": float,
}
