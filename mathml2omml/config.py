# mathml2omml/config.py
from typing import Any, Dict, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .logger import init_logging, logger

CONFIG_FILE = "config.yaml"
CONFIG_SECTION = "mathml2omml"


class ConversionOptions(BaseModel):
    """
    Immutable settings passed down every recursive conversion step.

    `libreoffice_compat` swaps native n-ary and matrix constructs for flattened
    approximations that LibreOffice renders correctly.
    """
    model_config = ConfigDict(frozen=True, extra='forbid')

    libreoffice_compat: bool = False
    max_depth: int = Field(200, ge=1, description="Deepest element nesting accepted before giving up.")
    recover: bool = Field(True, description="Salvage what lxml can from malformed XML instead of raising.")
    log_level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = Field(
        'WARNING', description="Package logger level, applied when loaded from YAML or set explicitly.")

    def with_compat(self, libreoffice_compat: bool) -> 'ConversionOptions':
        if libreoffice_compat == self.libreoffice_compat:
            return self
        return self.model_copy(update={'libreoffice_compat': libreoffice_compat})


def load_options(path: str = CONFIG_FILE) -> ConversionOptions:
    """
    Load conversion options from the `mathml2omml:` section of a YAML file.

    A missing file, a missing section or unreadable YAML falls back to the defaults.
    Values that are present but invalid raise `pydantic.ValidationError`.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw: Dict[str, Any] = yaml.safe_load(f)[CONFIG_SECTION]
    except (FileNotFoundError, KeyError, TypeError, yaml.YAMLError) as e:
        logger.warning("%s not found or malformed (%s), using default options.", path, e)
        return ConversionOptions()
    if raw is None:
        return ConversionOptions()
    options = ConversionOptions.model_validate(raw)
    init_logging(options.log_level)
    return options
