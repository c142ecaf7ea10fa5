"""Built-in countertop lists.

Dimensions are width x depth in inches for a typical kitchen and bathroom
remodel (``standard``) and a small kitchen (``minimal``).
"""

from countertops.domain import CountertopSpec

from .schema import PresetName

_STANDARD: list[tuple[str, float, float]] = [
    ("Long Countertop", 137, 26),
    ("Island", 78, 44),
    ("Stove Left", 50, 26),
    ("Stove Right", 24, 26),
    ("Bar", 72, 26),
    ("Bathroom", 110, 26),
    ("Bathroom Back", 110, 4),
    ("Bathroom Bench", 42, 15),
    ("Long Backsplash", 162, 18),
    ("Stove Backsplash Left", 50, 18),
    ("Stove Backsplash Center", 30, 30),
    ("Stove Backsplash Right", 24, 18),
]

_MINIMAL: list[tuple[str, float, float]] = [
    ("Main Counter", 96, 26),
    ("Island", 60, 36),
    ("Backsplash", 96, 4),
]

_PRESET_ROWS: dict[PresetName, list[tuple[str, float, float]]] = {
    PresetName.STANDARD: _STANDARD,
    PresetName.MINIMAL: _MINIMAL,
}


def get_preset(name: PresetName | str) -> tuple[CountertopSpec, ...]:
    """Return the countertops of a preset, numbered 1..n.

    Raises:
        ValueError: If the preset name is unknown.
    """
    preset = PresetName(name)
    return tuple(
        CountertopSpec(id=str(index), width=width, height=height, label=label)
        for index, (label, width, height) in enumerate(_PRESET_ROWS[preset], start=1)
    )


def available_presets() -> list[str]:
    return [p.value for p in PresetName]
