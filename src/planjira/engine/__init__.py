"""Engine module exports."""

from planjira.engine.engine import ImportEngine
from planjira.engine.progress import ImportProgress, NullImportProgress
from planjira.engine.utils import BATCH_LABEL_PREFIX, batch_label, generate_batch_id

__all__ = [
    "BATCH_LABEL_PREFIX",
    "ImportEngine",
    "ImportProgress",
    "NullImportProgress",
    "batch_label",
    "generate_batch_id",
]
