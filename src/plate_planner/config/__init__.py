from .settings import PlannerSettings
from .loader import load_yaml_config, load_settings_from_yaml, load_design

__all__ = [
    "PlannerSettings",
    "load_yaml_config",
    "load_settings_from_yaml",
    "load_design",
]
