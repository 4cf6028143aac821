"""
Power regression backends registry and factory.
"""

from .base import PowerRegressor
from .gradient_boosting import GradientBoostingPowerRegressor
from .linear import LinearPowerRegressor

# Registry of available backends
REGRESSOR_REGISTRY = {
    "gradient_boosting": GradientBoostingPowerRegressor,
    "linear": LinearPowerRegressor,
}


def get_regressor(name: str, config: dict | None = None) -> PowerRegressor:
    """Factory to create an unfitted regression backend

    Args:
        name: Name of the backend (e.g., 'gradient_boosting')
        config: Configuration dict for the backend

    Returns:
        New, unfitted regressor instance

    Raises:
        ValueError: If name is not registered
    """
    if name not in REGRESSOR_REGISTRY:
        available = ", ".join(REGRESSOR_REGISTRY.keys())
        raise ValueError(f"Unknown regressor '{name}'. Available regressors: {available}")

    return REGRESSOR_REGISTRY[name](config)


def list_regressors() -> list[str]:
    """List all available regression backends"""
    return list(REGRESSOR_REGISTRY.keys())


__all__ = [
    "PowerRegressor",
    "GradientBoostingPowerRegressor",
    "LinearPowerRegressor",
    "REGRESSOR_REGISTRY",
    "get_regressor",
    "list_regressors",
]
