"""Configuration package for the academy site."""

from academy.config.app_config import (
    AppConfig,
    SiteConfig,
    get_content_dir,
    get_data_dir,
    get_state_dir,
    load_app_config,
)
from academy.config.sections import (
    Section,
    get_section,
    get_section_order,
    list_sections,
    load_sections,
)

__all__ = [
    "AppConfig",
    "SiteConfig",
    "get_content_dir",
    "get_data_dir",
    "get_state_dir",
    "load_app_config",
    "Section",
    "get_section",
    "get_section_order",
    "list_sections",
    "load_sections",
]
