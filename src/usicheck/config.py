from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional
import yaml
from pydantic import BaseModel, ConfigDict, Field

OutputFormat = Literal["text", "json"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


# ---- How the CLI prepares raw input before it reaches the engine ----
class InputConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    strip_separators: bool = False  # "BNGH-7C75-FN" -> "BNGH7C75FN"
    uppercase_prefix: bool = True   # generate() itself is case-sensitive


class OutputConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    format: OutputFormat = "text"


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: LogLevel = "WARNING"


# ---- Root config ----
class UsiConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    input: InputConfig = Field(default_factory=InputConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# ---- Loader ----
def load_config(path: Optional[Path]) -> UsiConfig:
    if not path:
        return UsiConfig()
    data = yaml.safe_load(Path(path).read_text()) or {}
    return UsiConfig.model_validate(data)
