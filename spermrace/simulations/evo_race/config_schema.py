"""Config schema for the evo_race variant."""

REQUIRED_PARAMS = {
    "cohort_size": int,
}

DEFAULTS = {
    "cohort_size": 200,
    "num_targets": 2,
    "target_size": 35.0,
    "mutation_rate": 0.3,
    "reset_delay": 120,
    "noise_step": 0.1,
    "width": 600.0,
    "height": 600.0,
    "margin": 20.0,
    "spawn_offset": 20.0,
    "target_y": 80.0,
}

OPTIONAL_PARAMS = {
    "num_targets": int,
    "target_size": float,
    "mutation_rate": float,
    "reset_delay": int,
    "noise_step": float,
    "width": float,
    "height": float,
    "margin": float,
    "spawn_offset": float,
    "target_y": float,
}
