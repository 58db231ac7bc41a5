"""Config schema for the classic_race variant."""

REQUIRED_PARAMS: dict[str, type] = {}

DEFAULTS = {
    "cohort_size": 2000,
    "width": 600.0,
    "height": 600.0,
    "margin": 20.0,
    "spawn_offset": 20.0,
    "target_y": 80.0,
    "target_size": 50.0,
    "min_speed": 2.0,
    "max_speed": 4.0,
    "wiggle_amplitude": 1.0,
    "noise_step": 0.05,
}

OPTIONAL_PARAMS = {
    "cohort_size": int,
    "width": float,
    "height": float,
    "margin": float,
    "spawn_offset": float,
    "target_y": float,
    "target_size": float,
    "min_speed": float,
    "max_speed": float,
    "wiggle_amplitude": float,
    "noise_step": float,
}
