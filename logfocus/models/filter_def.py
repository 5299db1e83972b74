"""LogFilter data model for logfocus.

This model represents a single matching rule: a regex pattern, the color
used to highlight matching lines, and two independent display flags.
"""

from __future__ import annotations

import random
import re

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    field_validator,
)

COLOR_RE = re.compile(r"#[0-9a-fA-F]{6}")


def random_color() -> str:
    """Return a pseudo-random ``#rrggbb`` color code."""
    return "#%06x" % random.randint(0, 0xFFFFFF)


def is_valid_color(value: str) -> bool:
    """Check whether a string is a ``#RRGGBB`` color code."""
    return isinstance(value, str) and COLOR_RE.fullmatch(value) is not None


class LogFilter(BaseModel):
    """A filter pattern with display settings.

    Field values are never coerced: a persisted ``"true"`` string is not a
    boolean. Files written with the older ``regex``/``isHighlighted``/
    ``isShown`` names are accepted on input; output always uses the
    canonical field names.

    Attributes:
        pattern: Regular expression searched for anywhere in a line.
        color: Highlight color as ``#RRGGBB``, kept exactly as given.
        highlighted: Whether matching lines are marked.
        shown: Whether matching lines are kept in the focus view.
    """

    model_config = ConfigDict(
        frozen=False,
        populate_by_name=True,
        validate_assignment=True,
    )

    pattern: StrictStr = Field(validation_alias=AliasChoices("pattern", "regex"))
    color: StrictStr = Field(default_factory=random_color)
    highlighted: StrictBool = Field(
        default=True,
        validation_alias=AliasChoices("highlighted", "isHighlighted"),
    )
    shown: StrictBool = Field(
        default=True,
        validation_alias=AliasChoices("shown", "isShown"),
    )

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        """Validate that the color is a ``#`` followed by six hex digits."""
        if not COLOR_RE.fullmatch(v):
            raise ValueError(f"Invalid color {v!r}: expected #RRGGBB")
        return v


class StoredFilter(LogFilter):
    """A filter as read back from a filters file.

    Every field is required, so an entry missing its color or a flag is
    rejected instead of being filled in with defaults.
    """

    color: StrictStr
    highlighted: StrictBool = Field(
        validation_alias=AliasChoices("highlighted", "isHighlighted"),
    )
    shown: StrictBool = Field(
        validation_alias=AliasChoices("shown", "isShown"),
    )

    def to_filter(self) -> LogFilter:
        return LogFilter(**self.model_dump())
