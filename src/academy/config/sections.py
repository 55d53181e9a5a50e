"""Section catalog loader.

Loads curriculum sections from data/config/sections_v1.yaml.
The order of the file is the navigation order of the site.

Usage:
    from academy.config.sections import get_section, list_sections

    section = get_section("apex")
    all_sections = list_sections()
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
SECTIONS_FILE = Path("data/config/sections_v1.yaml")


@dataclass
class Section:
    """A named grouping of topics."""

    id: str
    name: str
    description: str = ""
    icon: str = ""
    color: str = "gray"


# Module-level cache
_cached_sections: dict[str, Section] | None = None


def _get_default_sections() -> dict[str, Section]:
    """Get default sections when config file is missing."""
    return {
        "basics": Section(
            id="basics",
            name="Salesforce Basics",
            description="Platform fundamentals every developer needs before writing code",
            icon="📘",
            color="teal",
        ),
        "apex": Section(
            id="apex",
            name="Apex Fundamentals",
            description="Master Salesforce's powerful programming language from variables to advanced patterns",
            icon="⚡",
            color="blue",
        ),
        "lwc": Section(
            id="lwc",
            name="LWC Fundamentals",
            description="Build modern Lightning Web Components with comprehensive component patterns",
            icon="⚛️",
            color="purple",
        ),
        "integration": Section(
            id="integration",
            name="Integration Patterns",
            description="Connect Salesforce with external systems using REST, SOAP, and platform events",
            icon="🔗",
            color="orange",
        ),
        "testing": Section(
            id="testing",
            name="Testing Strategies",
            description="Write comprehensive tests for bulletproof Salesforce applications",
            icon="🧪",
            color="green",
        ),
    }


def load_sections(force_reload: bool = False) -> dict[str, Section]:
    """Load all sections from config file.

    Args:
        force_reload: If True, ignore cache and reload from file.

    Returns:
        Ordered dictionary mapping section ID to Section object.
    """
    global _cached_sections

    if _cached_sections is not None and not force_reload:
        return _cached_sections

    if not SECTIONS_FILE.exists():
        logger.debug("sections_file_not_found", path=str(SECTIONS_FILE))
        _cached_sections = _get_default_sections()
        return _cached_sections

    try:
        data = yaml.safe_load(SECTIONS_FILE.read_text(encoding="utf-8")) or {}
        sections_data = data.get("sections", [])

        _cached_sections = {}
        for sdata in sections_data:
            sid = sdata["id"]
            _cached_sections[sid] = Section(
                id=sid,
                name=sdata.get("name", sid),
                description=sdata.get("description", ""),
                icon=sdata.get("icon", ""),
                color=sdata.get("color", "gray"),
            )

        logger.debug("loaded_sections", count=len(_cached_sections))
        return _cached_sections

    except (yaml.YAMLError, KeyError, TypeError, AttributeError) as e:
        logger.error("failed_to_load_sections", error=str(e))
        _cached_sections = _get_default_sections()
        return _cached_sections


def get_section(section_id: str) -> Section | None:
    """Get a specific section by ID.

    Returns:
        Section object or None if not found.
    """
    return load_sections().get(section_id)


def list_sections() -> list[Section]:
    """List all sections in navigation order."""
    return list(load_sections().values())


def get_section_order() -> list[str]:
    """Section IDs in navigation order."""
    return list(load_sections().keys())


def clear_sections_cache() -> None:
    """Clear the sections cache."""
    global _cached_sections
    _cached_sections = None
