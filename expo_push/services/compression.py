"""Request body compression policy."""

import gzip
import zlib
from dataclasses import dataclass
from enum import Enum

from expo_push.config import DEFAULT_GZIP_THRESHOLD
from expo_push.errors import CodecError


class GzipMode(str, Enum):
    THRESHOLD = "threshold"
    NEVER = "never"
    ALWAYS = "always"


@dataclass(frozen=True)
class GzipPolicy:
    """Decides, per serialized chunk, whether the body gets gzipped.

    Size is always measured on the uncompressed body.
    """

    mode: GzipMode = GzipMode.THRESHOLD
    threshold_bytes: int = DEFAULT_GZIP_THRESHOLD

    @classmethod
    def threshold(cls, threshold_bytes: int = DEFAULT_GZIP_THRESHOLD) -> "GzipPolicy":
        if threshold_bytes < 0:
            raise ValueError("gzip threshold must be >= 0")
        return cls(GzipMode.THRESHOLD, threshold_bytes)

    @classmethod
    def never(cls) -> "GzipPolicy":
        return cls(GzipMode.NEVER)

    @classmethod
    def always(cls) -> "GzipPolicy":
        return cls(GzipMode.ALWAYS)

    @classmethod
    def from_name(cls, name: str, threshold_bytes: int = DEFAULT_GZIP_THRESHOLD) -> "GzipPolicy":
        mode = GzipMode(name)
        if mode is GzipMode.THRESHOLD:
            return cls.threshold(threshold_bytes)
        return cls(mode)

    def should_compress(self, size: int) -> bool:
        if self.mode is GzipMode.ALWAYS:
            return True
        if self.mode is GzipMode.NEVER:
            return False
        return size > self.threshold_bytes


def gzip_body(body: bytes) -> bytes:
    try:
        return gzip.compress(body)
    except (OSError, zlib.error) as e:
        raise CodecError(f"failed to gzip request body: {e}") from e


def apply_policy(body: bytes, policy: GzipPolicy) -> tuple[bytes, bool]:
    """Return the body to send and whether it was compressed."""
    if not policy.should_compress(len(body)):
        return body, False
    return gzip_body(body), True
