# File: schemaddl/config.py
"""
schemaddl - Document Output Configuration
==========================================
Settings that control how the schema model is written out as a structured
document.  The defaults reproduce the reference YAML layout.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

logger: logging.Logger = logging.getLogger("schemaddl.config")


class DocumentFormat(str, Enum):
    """Supported document encodings."""

    YAML = "yaml"
    JSON = "json"

    @classmethod
    def from_path(
        cls, path: Union[str, Path], default: Optional["DocumentFormat"] = None
    ) -> "DocumentFormat":
        """
        Pick the format from a file suffix.

        ``.json`` is JSON and ``.yaml`` / ``.yml`` are YAML.  Any other suffix
        falls back to *default* (YAML when not given).
        """
        suffix: str = Path(path).suffix.lower()
        if suffix == ".json":
            return cls.JSON
        if suffix in (".yaml", ".yml"):
            return cls.YAML
        fallback: DocumentFormat = default or cls.YAML
        logger.info("Unknown extension '%s', using %s.", suffix, fallback.value)
        return fallback


class DocumentConfig(BaseModel):
    """Options for ``schemaddl.documents.dump_document``."""

    model_config = ConfigDict(
        validate_assignment=True,
        frozen=False,
        extra="forbid",
    )

    format: DocumentFormat = Field(
        default=DocumentFormat.YAML, description="Output encoding."
    )
    indent: int = Field(
        default=2, ge=1, le=8, description="Indentation width for nested blocks."
    )
    explicit_start: bool = Field(
        default=False, description="Emit a leading '---' (YAML only)."
    )


__all__: List[str] = [
    "DocumentFormat",
    "DocumentConfig",
]
