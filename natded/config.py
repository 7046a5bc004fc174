"""Runtime settings for the command-line driver.

Settings come from the environment, after loading a ``.env`` file from the
working directory if there is one:

    NATDED_LOG_LEVEL   standard logging level name (default: WARNING)
    NATDED_ASCII       print formulas with & | -> instead of ∧ ∨ → (default: false)
"""

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from natded.result import Err, Ok, Result

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    ascii: bool = False

    @classmethod
    def from_env(cls) -> Result["Settings", ValueError]:
        """Read settings from the environment (and ``.env``)."""
        load_dotenv(find_dotenv(usecwd=True))
        level = os.getenv("NATDED_LOG_LEVEL", cls.log_level).strip().upper()
        if level not in LOG_LEVELS:
            return Err(
                ValueError(
                    f"NATDED_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {level!r}"
                )
            )

        raw_ascii = os.getenv("NATDED_ASCII", "").strip().lower()
        match raw_ascii:
            case flag if flag in _TRUE:
                use_ascii = True
            case flag if flag in _FALSE:
                use_ascii = False
            case _:
                return Err(ValueError(f"NATDED_ASCII must be a boolean, got {raw_ascii!r}"))

        return Ok(cls(log_level=level, ascii=use_ascii))
