"""Runtime configuration for UDBuildings.

Import the resolved settings loader from here::

    from udbuildings.config import load_settings
"""

from .settings import Settings, load_settings, settings_from_env

__all__ = ["Settings", "load_settings", "settings_from_env"]
