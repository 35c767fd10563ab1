"""Server configuration."""

from chainmux.config.settings import ServerSettings

__all__ = ["ServerSettings"]
