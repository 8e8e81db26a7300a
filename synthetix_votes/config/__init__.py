from .schema import StrategyConfig, validate_config, load_config, MAX_QUERY_FIRST

__all__ = [
    "StrategyConfig",
    "validate_config",
    "load_config",
    "MAX_QUERY_FIRST",
]
