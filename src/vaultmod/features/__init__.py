"""Editor features built on the core rewriter and ports."""

from .block_alias import BatchResult, BlockAliasFeature, process_file, process_files, should_trigger
from .creation_guard import CreationGuard, PhantomLinkTracker
from .properties_fold import FoldCache, PropertiesFolder, has_properties

__all__ = [
    "BatchResult",
    "BlockAliasFeature",
    "CreationGuard",
    "FoldCache",
    "PhantomLinkTracker",
    "PropertiesFolder",
    "has_properties",
    "process_file",
    "process_files",
    "should_trigger",
]
