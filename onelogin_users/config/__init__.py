"""Configuration module for the OneLogin users client."""
from .settings import ClientConfig, load_settings, host_for_region

__all__ = ["ClientConfig", "load_settings", "host_for_region"]
