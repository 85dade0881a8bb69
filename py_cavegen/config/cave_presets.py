"""
Named cave generation presets.

Each preset bundles grid dimensions and a fill percentage. Higher fill values
give tighter caves with more, smaller rooms; lower values give open caverns.
"""

from typing import Dict, List

PRESETS: Dict[str, Dict[str, int]] = {
    # Standard level size
    "default": {"width": 128, "height": 80, "fill_percent": 50},
    # Quick maps for tests and previews
    "small": {"width": 48, "height": 32, "fill_percent": 45},
    # Wide caverns with few walls
    "sprawling": {"width": 160, "height": 120, "fill_percent": 42},
    # Dense rock with narrow chambers
    "tight": {"width": 96, "height": 64, "fill_percent": 53},
}


def get_preset(name: str) -> Dict[str, int]:
    """
    Get a preset by name.

    Args:
        name: Preset name

    Returns:
        Copy of the preset parameters

    Raises:
        KeyError: If the preset does not exist
    """
    if name not in PRESETS:
        raise KeyError(f"Unknown cave preset '{name}'. Available: {', '.join(list_presets())}")
    return dict(PRESETS[name])


def list_presets() -> List[str]:
    """List available preset names."""
    return sorted(PRESETS)
