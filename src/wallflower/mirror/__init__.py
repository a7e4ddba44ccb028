"""Local photo mirroring."""

from wallflower.mirror.pipeline import (
    MirrorReport,
    MirrorResult,
    MirrorStatus,
    PhotoMirror,
    photo_filename,
)
from wallflower.mirror.pool import TaskOutcome, WorkerPool

__all__ = [
    "MirrorReport",
    "MirrorResult",
    "MirrorStatus",
    "PhotoMirror",
    "TaskOutcome",
    "WorkerPool",
    "photo_filename",
]
