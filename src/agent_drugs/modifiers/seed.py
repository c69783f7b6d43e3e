"""Catalog seed data.

The catalog is written once when the store is bootstrapped and is read-only
afterwards. It comes either from DEFAULT_DEFINITIONS or from a YAML file:

    drugs:
      - name: focus
        prompt: You are extremely focused...
        default_duration_minutes: 60
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml

from agent_drugs.core.errors import ValidationError
from agent_drugs.modifiers.models import ModifierDefinition

DEFAULT_DEFINITIONS: tuple[ModifierDefinition, ...] = (
    ModifierDefinition(
        name="focus",
        instruction_text=(
            "You are extremely focused and detail-oriented. "
            "Break down problems systematically and avoid shortcuts."
        ),
        default_duration_minutes=60,
    ),
    ModifierDefinition(
        name="creative",
        instruction_text=(
            "Think outside the box and propose unconventional solutions. "
            "Embrace novelty and experimentation."
        ),
        default_duration_minutes=45,
    ),
    ModifierDefinition(
        name="concise",
        instruction_text=(
            "Respond with extreme brevity. Get straight to the point with minimal elaboration."
        ),
        default_duration_minutes=30,
    ),
    ModifierDefinition(
        name="verbose",
        instruction_text=(
            "Provide detailed explanations with examples, context, "
            "and thorough reasoning for everything."
        ),
        default_duration_minutes=45,
    ),
    ModifierDefinition(
        name="debug",
        instruction_text=(
            "Deep debugging mindset. Trace issues systematically "
            "and consider edge cases meticulously."
        ),
        default_duration_minutes=90,
    ),
    ModifierDefinition(
        name="speed",
        instruction_text=(
            "Move rapidly through tasks with quick decisions. "
            "Prioritize velocity over perfection."
        ),
        default_duration_minutes=30,
    ),
    ModifierDefinition(
        name="cautious",
        instruction_text=(
            "Exercise extreme caution. "
            "Question assumptions and validate everything before proceeding."
        ),
        default_duration_minutes=60,
    ),
    ModifierDefinition(
        name="experimental",
        instruction_text="Embrace experimental approaches. Try new things and learn from failures.",
        default_duration_minutes=45,
    ),
)


def parse_definitions(data: Any, *, source: str = "<data>") -> list[ModifierDefinition]:
    """Validate raw seed data and build definitions.

    Args:
        data: Parsed YAML document (a mapping with a ``drugs`` list).
        source: Label used in error messages.

    Raises:
        ValidationError: On a malformed document, a bad entry or a duplicate name.
    """
    if not isinstance(data, dict) or not isinstance(data.get("drugs"), list):
        raise ValidationError(
            f"Seed data must be a mapping with a 'drugs' list: {source}",
            field="drugs",
        )

    definitions: list[ModifierDefinition] = []
    seen: set[str] = set()
    for index, entry in enumerate(data["drugs"]):
        if not isinstance(entry, dict):
            raise ValidationError(
                f"Seed entry #{index} must be a mapping",
                field=f"drugs[{index}]",
            )
        name = entry.get("name")
        prompt = entry.get("prompt")
        duration = entry.get("default_duration_minutes")
        if not isinstance(name, str) or not name.strip():
            raise ValidationError(f"Seed entry #{index} has no name", field="name", value=name)
        if not isinstance(prompt, str) or not prompt.strip():
            raise ValidationError(
                f"Drug '{name}' has no prompt",
                field="prompt",
                details={"name": name},
            )
        # bool is an int subclass; reject it explicitly
        if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
            raise ValidationError(
                f"Drug '{name}' needs a positive integer default_duration_minutes",
                field="default_duration_minutes",
                value=duration,
            )
        if name in seen:
            raise ValidationError(f"Duplicate drug name: {name}", field="name", value=name)
        seen.add(name)
        definitions.append(
            ModifierDefinition(
                name=name,
                instruction_text=prompt,
                default_duration_minutes=duration,
            )
        )
    return definitions


def load_definitions(path: Path) -> list[ModifierDefinition]:
    """Load seed definitions from a YAML file.

    Raises:
        ValidationError: If the file is missing, unparsable or invalid.
    """
    if not path.exists():
        raise ValidationError(f"Seed file not found: {path}", field="seed_file", value=str(path))
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid YAML in seed file {path}: {e}", field="seed_file") from e
    return parse_definitions(data, source=str(path))


def resolve_definitions(seed_file: str | None) -> Sequence[ModifierDefinition]:
    """Return the definitions from ``seed_file``, or the built-in defaults."""
    if seed_file:
        return load_definitions(Path(seed_file).expanduser())
    return DEFAULT_DEFINITIONS
