"""fsmemo version information."""
from __future__ import annotations


__version__ = "1.0.0"
__version_info__ = (1, 0, 0)

# Component versions
COMPONENT_VERSIONS = {
    "cache": "1.0.0",
    "filesystem": "1.0.0",
    "resolver": "1.0.0",
    "config": "1.0.0",
}


def get_version_string() -> str:
    """Get formatted version string with all component info."""
    lines = [f"fsmemo v{__version__}", "Components:"]
    for component, version in COMPONENT_VERSIONS.items():
        lines.append(f"  {component}: {version}")
    return "\n".join(lines)
