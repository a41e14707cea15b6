"""Filesystem safety and cleanup engine.

This module provides path risk classification, junk detection, bounded
directory scanning, size aggregation and move-to-trash deletion.
"""

from junkctl.filesystem.categories import FileCategory, FileType, categorize, detect_file_type
from junkctl.filesystem.classifier import (
    can_delete,
    classify,
    recommended_scan_paths,
    validate_operation,
)
from junkctl.filesystem.junk import JunkDetector, is_junk
from junkctl.filesystem.locations import (
    DEFAULT_EXTENSIONS,
    default_scan_roots,
    list_temp_directories,
)
from junkctl.filesystem.models import (
    CleanResult,
    DeleteVerdict,
    EntryKind,
    FailedPath,
    FileEntry,
    OperationVerdict,
    PathVerdict,
    RiskLevel,
    ScanResult,
    SkippedPath,
)
from junkctl.filesystem.operator import TrashOperator, delete_all
from junkctl.filesystem.scanner import JunkScanner, scan
from junkctl.filesystem.sizes import file_info, size_of

__all__ = [
    "DEFAULT_EXTENSIONS",
    "CleanResult",
    "DeleteVerdict",
    "EntryKind",
    "FailedPath",
    "FileCategory",
    "FileEntry",
    "FileType",
    "JunkDetector",
    "JunkScanner",
    "OperationVerdict",
    "PathVerdict",
    "RiskLevel",
    "ScanResult",
    "SkippedPath",
    "TrashOperator",
    "can_delete",
    "categorize",
    "classify",
    "default_scan_roots",
    "delete_all",
    "detect_file_type",
    "file_info",
    "is_junk",
    "list_temp_directories",
    "recommended_scan_paths",
    "scan",
    "size_of",
    "validate_operation",
]
