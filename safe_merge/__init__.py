"""
Safe Merge - A CLI tool to merge a source folder into a destination folder.

Features:
- One-way merge (creates missing directories, copies missing files)
- Files present on both sides are verified by content hash
- Bails out before touching the filesystem on any content mismatch
- Dry run by default, --commit to apply
- Hard link first, streamed copy as fallback
- Fast file comparison using xxhash (md5 available)
"""

__version__ = "1.0.0"
