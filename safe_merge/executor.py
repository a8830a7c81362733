"""Plan execution: dry run or commit."""

import logging
import os
import shutil
import stat
import sys
from typing import Optional, TextIO

from .errors import InvalidActionError, NonRegularFileError
from .models import ActionKind, Plan

logger = logging.getLogger(__name__)


def copy_file_contents(src: str, dst: str) -> None:
    """
    Copy the bytes of src into dst, creating or truncating dst.

    The destination is synced to disk before it is closed. A partially
    written destination is left in place on failure.
    """
    with open(src, 'rb') as fin:
        with open(dst, 'wb') as fout:
            shutil.copyfileobj(fin, fout)
            fout.flush()
            os.fsync(fout.fileno())


def copy_file(src: str, dst: str) -> None:
    """
    Copy a regular file, preferring a hard link over a content copy.

    If dst already is the same underlying file as src, nothing is done.

    Raises:
        NonRegularFileError: if src, or an existing dst, is not a regular file
        OSError: if the source cannot be statted or the copy fails
    """
    src_stat = os.lstat(src)
    if not stat.S_ISREG(src_stat.st_mode):
        raise NonRegularFileError(src, "source", src_stat.st_mode)

    try:
        dst_stat = os.lstat(dst)
    except FileNotFoundError:
        pass
    else:
        if not stat.S_ISREG(dst_stat.st_mode):
            raise NonRegularFileError(dst, "destination", dst_stat.st_mode)
        if os.path.samestat(src_stat, dst_stat):
            logger.debug("Already the same file: %s and %s", src, dst)
            return

    try:
        os.link(src, dst)
        return
    except OSError as e:
        logger.debug("Hard link %s -> %s failed (%s), copying contents", src, dst, e)

    copy_file_contents(src, dst)


def execute_plan(plan: Plan, commit: bool = False, out: Optional[TextIO] = None) -> int:
    """
    Replay a plan in order, printing every action.

    Nothing is changed on disk unless commit is True. The first failure
    stops the run; already applied actions are not undone.

    Returns:
        Number of actions processed
    """
    out = out or sys.stdout
    count = 0
    for action in plan:
        kind = getattr(action, "kind", None)
        if kind is ActionKind.CREATE_DIRECTORY:
            print(action.describe(), file=out)
            if commit:
                os.mkdir(action.destination_path, action.permissions)
        elif kind is ActionKind.COPY_FILE:
            print(action.describe(), file=out)
            if commit:
                copy_file(action.source_path, action.destination_path)
        else:
            raise InvalidActionError(action)
        count += 1
    return count
