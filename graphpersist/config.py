"""Configuration defaults for graphpersist readers and writers."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class PersistenceConfig:
    """Defaults shared by the codecs."""

    # Compress simple-format files on write
    compress: bool = True

    # gzip compression level used when compressing
    compresslevel: int = 9

    # Text encoding for all formats
    encoding: str = "utf-8"

    # Check simple-format edge endpoints against the header vertex count
    strict_bounds: bool = True

    def resolve_compress(self, compress: Optional[bool]) -> bool:
        """Return `compress` or the configured default when it is None."""
        return self.compress if compress is None else bool(compress)


# Global configuration instance
PERSISTENCE_CONFIG = PersistenceConfig()
