"""Merge planning: compare the source tree against the destination tree."""

import errno
import logging
import os
import stat

from tqdm import tqdm

from .errors import ContentMismatchError
from .models import Action, ActionKind, Plan
from .scanner import compute_file_hash, walk_tree

logger = logging.getLogger(__name__)


def _exists(path: str) -> bool:
    """Return False only when nothing is at path; other stat errors propagate."""
    try:
        os.lstat(path)
    except FileNotFoundError:
        return False
    return True


def plan_merge(
    source_root: str | os.PathLike,
    destination_root: str | os.PathLike,
    algorithm: str = "xxh64",
    progress: bool = False,
) -> Plan:
    """
    Build the ordered list of actions merging source_root into destination_root.

    The filesystem is never modified here. Directories missing from the
    destination get a CREATE_DIRECTORY action with the source permission
    bits, missing files get a COPY_FILE action. Files present on both sides
    must hash to the same digest, otherwise planning stops.

    Args:
        source_root: Folder to merge from
        destination_root: Folder to merge into
        algorithm: Digest used to compare overlapping files
        progress: Show a progress bar on stderr

    Returns:
        Tuple of actions in pre-order walk order

    Raises:
        ContentMismatchError: if an overlapping file differs
        NotADirectoryError: if source_root is not a directory (or is a symlink)
        OSError: if any entry cannot be walked, statted or hashed
    """
    destination_root = os.fspath(destination_root)
    actions: list[Action] = []

    with tqdm(walk_tree(source_root), desc="Planning", unit="entry", disable=not progress) as pbar:
        for entry in pbar:
            if entry.relative_path:
                candidate = os.path.join(destination_root, entry.relative_path)
            elif not entry.is_dir:
                # Symlinks are not followed, not even for the root
                raise NotADirectoryError(
                    errno.ENOTDIR, "Source folder must be a real directory", entry.absolute_path
                )
            else:
                candidate = destination_root

            if entry.is_dir:
                if not _exists(candidate):
                    logger.debug("Directory missing in destination: %s", candidate)
                    actions.append(Action(
                        kind=ActionKind.CREATE_DIRECTORY,
                        source_path="",
                        destination_path=candidate,
                        permissions=stat.S_IMODE(entry.mode),
                    ))
                continue

            if not _exists(candidate):
                logger.debug("File missing in destination: %s", candidate)
                actions.append(Action(
                    kind=ActionKind.COPY_FILE,
                    source_path=entry.absolute_path,
                    destination_path=candidate,
                ))
                continue

            source_hash = compute_file_hash(entry.absolute_path, algorithm)
            destination_hash = compute_file_hash(candidate, algorithm)
            if source_hash != destination_hash:
                raise ContentMismatchError(entry.absolute_path, candidate, source_hash, destination_hash)
            logger.debug("Already merged: %s (%s)", candidate, source_hash)

    return tuple(actions)
