"""
Configuration loading for vc_changelog.

See :mod:`vc_changelog.config.loader` for the file format.
"""

from .loader import ChangelogConfig, ConfigError, config_from_dict, load_config  # noqa: F401
