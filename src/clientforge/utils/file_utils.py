import logging
import os
import shutil
import stat
from pathlib import Path
from typing import Optional

from clientforge.errors import (
    DestinationExistsError,
    SourceNotADirectoryError,
    SourceNotAFileError,
)
from clientforge.models import ClientConfig, CopyMode
from clientforge.utils.paths import PathGuard, PathLike

logger = logging.getLogger(__name__)

PRIVATE_DIR_MODE = 0o700


class FileUtils:
    """
    Filesystem helpers used by the target preparers.

    Every path goes through the PathGuard first, and every source is
    type-checked before anything is written.
    """

    def __init__(self, guard: Optional[PathGuard] = None, copy_mode: CopyMode = CopyMode.OVERWRITE):
        self.guard = guard or PathGuard()
        self.copy_mode = copy_mode

    @classmethod
    def from_config(cls, config: ClientConfig) -> "FileUtils":
        return cls(PathGuard(config.sandbox_root), config.copy_mode)

    def resolve(self, path: PathLike) -> Path:
        return self.guard.resolve(path)

    def folder_exists(self, dir_path: PathLike) -> bool:
        resolved = self.resolve(dir_path)
        try:
            return stat.S_ISDIR(os.lstat(resolved).st_mode)
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error(f"Error checking folder existence: {e}")
            raise

    def file_exists(self, file_path: PathLike) -> bool:
        resolved = self.resolve(file_path)
        try:
            return stat.S_ISREG(os.lstat(resolved).st_mode)
        except FileNotFoundError:
            return False

    def create_directory(self, dir_path: PathLike) -> Path:
        resolved = self.resolve(dir_path)
        try:
            resolved.mkdir(mode=PRIVATE_DIR_MODE, parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Error creating directory: {e}")
            raise
        logger.debug(f"Created directory: {resolved}")
        return resolved

    def copy_folder(self, src: PathLike, dest: PathLike) -> Path:
        src_path = self.resolve(src)
        dest_path = self.resolve(dest)
        if not self.folder_exists(src_path):
            logger.error(f"Error copying folder: {src_path} is not a directory")
            raise SourceNotADirectoryError(src_path)

        try:
            shutil.copytree(src_path, dest_path, dirs_exist_ok=True)
        except (OSError, shutil.Error) as e:
            logger.error(f"Error copying folder: {e}")
            raise
        logger.info(f"Copied folder: {src_path} -> {dest_path}")
        return dest_path

    def copy_file(self, src: PathLike, dest: PathLike, mode: Optional[CopyMode] = None) -> Path:
        """
        Copy a single file, creating the destination folder when needed.

        In OVERWRITE mode an existing destination is replaced; in EXCLUSIVE
        mode it raises DestinationExistsError and the file is left as is.
        """
        mode = mode or self.copy_mode
        src_path = self.resolve(src)
        dest_path = self.resolve(dest)
        if not self.file_exists(src_path):
            logger.error(f"Error copying file: {src_path} is not a file")
            raise SourceNotAFileError(src_path)

        self.create_directory(dest_path.parent)
        try:
            if mode == CopyMode.EXCLUSIVE:
                with open(src_path, "rb") as fsrc, open(dest_path, "xb") as fdst:
                    shutil.copyfileobj(fsrc, fdst)
            else:
                shutil.copyfile(src_path, dest_path)
        except FileExistsError:
            logger.error(f"Error copying file: {dest_path} already exists")
            raise DestinationExistsError(dest_path)
        except OSError as e:
            logger.error(f"Error copying file: {e}")
            raise
        logger.info(f"Copied file: {src_path} -> {dest_path}")
        return dest_path

    def update_file(self, src: PathLike, dest: PathLike) -> Path:
        src_path = self.resolve(src)
        dest_path = self.resolve(dest)
        if not self.file_exists(src_path):
            logger.error(f"Error updating file: {src_path} is not a file")
            raise SourceNotAFileError(src_path)

        self.create_directory(dest_path.parent)
        try:
            content = src_path.read_text(encoding="utf-8")
            dest_path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.error(f"Error updating file: {e}")
            raise
        logger.info(f"Updated file: {src_path} -> {dest_path}")
        return dest_path

    def rename_folder(self, old_path: PathLike, new_path: PathLike) -> Path:
        old = self.resolve(old_path)
        new = self.resolve(new_path)
        if not self.folder_exists(old):
            logger.error(f"Error renaming folder: {old} is not a directory")
            raise SourceNotADirectoryError(old)

        try:
            old.rename(new)
        except OSError as e:
            logger.error(f"Error renaming folder: {e}")
            raise
        logger.info(f"Renamed folder: {old} -> {new}")
        return new

    def rename_file(self, old_path: PathLike, new_path: PathLike) -> Path:
        old = self.resolve(old_path)
        new = self.resolve(new_path)
        if not self.file_exists(old):
            logger.error(f"Error renaming file: {old} is not a file")
            raise SourceNotAFileError(old)

        self.create_directory(new.parent)
        try:
            old.rename(new)
        except OSError as e:
            logger.error(f"Error renaming file: {e}")
            raise
        logger.info(f"Renamed file: {old} -> {new}")
        return new
