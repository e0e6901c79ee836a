from .config import ValidatorConfig, config_from_env, load_validator_config

__all__ = [
    "ValidatorConfig",
    "config_from_env",
    "load_validator_config",
]
