"""Configuration access and loader settings."""

from blockregen.config.section import ConfigSection, load_yaml_file
from blockregen.config.settings import LoaderSettings

__all__ = ["ConfigSection", "LoaderSettings", "load_yaml_file"]
