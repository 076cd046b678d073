"""Shared design tokens for rendered pages.

Tokens are loaded once per process and are read-only; templates receive
them as CSS custom properties and only reference classes from
`static/styles.css`.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from .config import settings

logger = logging.getLogger("app.style")


class StyleTokens(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    spacing_sm: str = "8px"
    spacing_md: str = "16px"
    spacing_lg: str = "32px"
    color_text: str = "#222222"
    color_muted: str = "#666666"
    color_accent: str = "#00aa66"
    color_error: str = "#c0392b"
    color_border: str = "#dddddd"
    font_family: str = "Arial, sans-serif"
    font_size: str = "16px"
    radius: str = "8px"

    def css_variables(self) -> str:
        """Render the tokens as `--name: value;` declarations."""
        return " ".join(
            f"--{name.replace('_', '-')}: {value};" for name, value in self.model_dump().items()
        )


def load_style_tokens(path: str = "") -> StyleTokens:
    """Build tokens from defaults, overridden by a JSON file when `path` is set."""
    if not path:
        return StyleTokens()
    overrides = json.loads(Path(path).expanduser().read_text(encoding="utf-8"))
    logger.info("loaded style tokens from %s", path)
    return StyleTokens(**overrides)


@lru_cache(maxsize=1)
def get_style_tokens() -> StyleTokens:
    return load_style_tokens(settings.STYLE_TOKENS_FILE)
