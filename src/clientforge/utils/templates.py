import json
import logging
import plistlib
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

from clientforge.errors import AssetNotFoundError
from clientforge.models import Number, format_number
from clientforge.utils.file_utils import FileUtils
from clientforge.utils.paths import PathLike

logger = logging.getLogger(__name__)


class TemplatePatcher:
    """Applies per-client text patches to files copied from a template."""

    def __init__(self, files: Optional[FileUtils] = None):
        self.files = files or FileUtils()

    def _existing_file(self, path: PathLike) -> Path:
        resolved = self.files.resolve(path)
        if not self.files.file_exists(resolved):
            logger.error(f"Template file not found: {resolved}")
            raise AssetNotFoundError(resolved)
        return resolved

    def update_env_file(self, env: Mapping[str, str], env_file_path: PathLike) -> str:
        """
        Rewrites ``KEY=...`` lines whose key is configured as ``KEY="value"``.
        Lines with unknown keys, comments and blank lines are kept untouched.
        """
        path = self._existing_file(env_file_path)
        with open(path, "r", encoding="utf-8", newline="") as f:
            content = f.read()

        lines = []
        for line in content.splitlines(keepends=True):
            body = line.rstrip("\r\n")
            ending = line[len(body):]
            key = body.split("=", 1)[0]
            if key in env:
                lines.append(f'{key}="{env[key]}"{ending}')
            else:
                lines.append(line)

        new_content = "".join(lines)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(new_content)
        logger.info(f"Updated .env file at: {path} with the following configuration:\n{new_content}")
        return new_content

    def set_plist_values(self, plist_path: PathLike, values: Mapping[str, Any]) -> Dict[str, Any]:
        path = self._existing_file(plist_path)
        with open(path, "rb") as f:
            data = plistlib.load(f)

        data.update(values)

        with open(path, "wb") as f:
            plistlib.dump(data, f)
        logger.info(f"Updated {', '.join(values)} in {path}")
        return data

    def replace_in_file(self, file_path: PathLike, old: str, new: str) -> int:
        """Replaces every occurrence of ``old`` and returns how many were found."""
        path = self._existing_file(file_path)
        content = path.read_text(encoding="utf-8")
        count = content.count(old)
        content = content.replace(old, new)
        path.write_text(content, encoding="utf-8")
        logger.info(f"Replaced {count} occurrence(s) of {old} in {path}")
        return count

    def write_splash_contents_json(self, folder_path: PathLike, image_name: str, scales: Iterable[Number]) -> Path:
        """
        Writes the asset catalog manifest of a splash screen image set. The
        file names follow the naming used when generating the images
        (no suffix for 1x, ``@{scale}x`` otherwise).
        """
        images = []
        for scale in scales:
            suffix = "" if scale == 1 else f"@{format_number(scale)}x"
            images.append({
                "filename": f"{image_name}{suffix}.png",
                "idiom": "universal",
                "scale": f"{format_number(scale)}x",
            })
        content = {
            "images": images,
            "info": {
                "author": "xcode",
                "version": 1,
            },
        }

        folder = self.files.create_directory(folder_path)
        contents_path = folder / "Contents.json"
        contents_path.write_text(json.dumps(content, indent=2), encoding="utf-8")
        logger.info(f"Created Contents.json for splash screen at {contents_path}")
        return contents_path

    def write_appcenter_config(self, config_path: PathLike, app_secret: str) -> Path:
        """Sets ``app_secret`` in an App Center JSON config, creating the file when absent."""
        path = self.files.resolve(config_path)
        data = {}
        if self.files.file_exists(path):
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)

        data["app_secret"] = app_secret

        self.files.create_directory(path.parent)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=4)
        logger.info(f"Updated App Center secret in {path}")
        return path
