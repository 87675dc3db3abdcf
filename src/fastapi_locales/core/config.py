from functools import lru_cache
import math
import re
from typing import Annotated, Any, Literal

from pydantic import BeforeValidator, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fastapi_locales.core.exceptions import InvalidDurationError

# "<number>[ ]<unit>", e.g. "1y", "30d", "12 hours"
_DURATION_RE = re.compile(
    r"^(-?(?:\d+)?\.?\d+) *([a-z]+)?$",
    re.IGNORECASE,
)

_SECOND = 1.0
_MINUTE = _SECOND * 60
_HOUR = _MINUTE * 60
_DAY = _HOUR * 24
_WEEK = _DAY * 7
_YEAR = _DAY * 365.25

_UNIT_SECONDS: dict[str, float] = {
    **dict.fromkeys(
        ("ms", "msec", "msecs", "millisecond", "milliseconds"), _SECOND / 1000
    ),
    **dict.fromkeys(("s", "sec", "secs", "second", "seconds"), _SECOND),
    **dict.fromkeys(("m", "min", "mins", "minute", "minutes"), _MINUTE),
    **dict.fromkeys(("h", "hr", "hrs", "hour", "hours"), _HOUR),
    **dict.fromkeys(("d", "day", "days"), _DAY),
    **dict.fromkeys(("w", "week", "weeks"), _WEEK),
    **dict.fromkeys(("y", "yr", "yrs", "year", "years"), _YEAR),
}


def parse_duration(value: Any) -> int:
    """Parse a duration into whole seconds.

    Accepts plain numbers (seconds) and strings such as "1y", "30d",
    "12 hours" or "90". A unit-less string is read as seconds.

    Raises:
        InvalidDurationError: If the value is not a non-negative duration.
    """
    if isinstance(value, bool):
        raise InvalidDurationError(value)

    if isinstance(value, int | float):
        seconds = float(value)
    elif isinstance(value, str):
        match = _DURATION_RE.match(value.strip())
        if not match:
            raise InvalidDurationError(value)
        unit = (match.group(2) or "s").lower()
        if unit not in _UNIT_SECONDS:
            raise InvalidDurationError(value)
        seconds = float(match.group(1)) * _UNIT_SECONDS[unit]
    else:
        raise InvalidDurationError(value)

    if not math.isfinite(seconds) or seconds < 0:
        raise InvalidDurationError(value)
    return int(seconds)


def parse_list(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    if isinstance(v, list | str):
        return v
    raise ValueError(v)


class LocaleSettings(BaseSettings):
    """Process-wide locale configuration.

    Built once at startup and shared read-only by every request.
    Values come from keyword overrides, then LOCALES_* environment
    variables, then the defaults below.
    """

    model_config = SettingsConfigDict(
        env_prefix="LOCALES_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    DEFAULT_LOCALE: str = Field(default="en_US", min_length=1)
    QUERY_FIELD: str = "locale"
    COOKIE_FIELD: str = "locale"
    LOCALE_ALIAS: dict[str, str] = {}
    COOKIE_MAX_AGE: Annotated[int, BeforeValidator(parse_duration)] = Field(
        default="1y", validate_default=True
    )
    # Name under which the bound translator is exposed to request state
    # and templates.
    FUNCTION_NAME: str = "__"

    DIRS: Annotated[list[str] | str, BeforeValidator(parse_list)] = ["locales"]

    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    DEBUG: bool = False

    @field_validator("DEFAULT_LOCALE", "QUERY_FIELD", "COOKIE_FIELD", mode="after")
    @classmethod
    def strip_names(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @property
    def resource_dirs(self) -> list[str]:
        """DIRS normalized to a list."""
        if isinstance(self.DIRS, str):
            return [self.DIRS]
        return list(self.DIRS)


@lru_cache
def get_settings() -> LocaleSettings:
    return LocaleSettings()
