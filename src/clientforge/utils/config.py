import json
import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Optional, Union

from clientforge.errors import ConfigReadError
from clientforge.models import (
    AndroidConfig,
    ClientConfig,
    CopyMode,
    IosConfig,
    IosImageSize,
    ReactConfig,
)

logger = logging.getLogger(__name__)


class ClientForgeConfig:
    """
    Locates and loads the ClientForge configuration.

    Lookup order for the configuration file:
    1. CLIENTFORGE_CONFIG environment variable
    2. config.json in the install root (CLIENTFORGE_HOME, or the project root)
    """

    CONFIG_FILE_NAME = "config.json"

    @classmethod
    def install_root(cls) -> Path:
        home = os.environ.get("CLIENTFORGE_HOME")
        if home:
            return Path(home).expanduser().resolve()
        # src/clientforge/utils/config.py -> project root
        return Path(__file__).resolve().parents[3]

    @classmethod
    def default_config_path(cls) -> Path:
        override = os.environ.get("CLIENTFORGE_CONFIG")
        if override:
            return Path(override).expanduser().resolve()
        return cls.install_root() / cls.CONFIG_FILE_NAME

    @classmethod
    def is_debug_mode(cls) -> bool:
        """Checks if debug mode is enabled via the CLIENTFORGE_DEBUG environment variable."""
        if os.environ.get('CLIENTFORGE_DEBUG', '').lower() in ('1', 'true', 'yes'):
            return True

        from clientforge import __version__
        return "dev" in __version__.lower()

    @classmethod
    def load(cls, config_path: Optional[Union[str, Path]] = None) -> ClientConfig:
        path = Path(config_path) if config_path else cls.default_config_path()
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Could not read config file at path: {path} ({e})")
            raise ConfigReadError(f"Could not read config file at path: {path}") from e

        if not isinstance(data, dict):
            raise ConfigReadError(f"Invalid config file format in '{path}'. Expected a dictionary.")

        config = cls.from_dict(data, base_dir=path.resolve().parent)
        logger.info(f"Read configuration from: {path}")
        return config

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Path) -> ClientConfig:
        """Builds a ClientConfig; relative paths are taken relative to base_dir."""
        try:
            client_name = _required_str(data, "clientName")
            react = data["react"]
            android = data["android"]
            ios = data["ios"]

            env = data.get("env") or {}
            if not isinstance(env, dict):
                raise ConfigReadError("'env' must be an object")

            copy_mode_value = data.get("copyMode", CopyMode.OVERWRITE.value)
            try:
                copy_mode = CopyMode(copy_mode_value)
            except ValueError:
                raise ConfigReadError(f"Unknown copyMode '{copy_mode_value}'")

            sandbox_root = data.get("sandboxRoot")

            ios_splash_sizes = _sizes(ios.get("splashScreenBaseImageSizes", []), "ios.splashScreenBaseImageSizes")
            if len(ios_splash_sizes) > 1:
                logger.warning(
                    "Several iOS splash screen base sizes configured; file names do not include the size, "
                    "so only the last one is kept."
                )

            return ClientConfig(
                client_name=client_name,
                env=MappingProxyType({str(k): str(v) for k, v in env.items()}),
                app_secret_android=data.get("app_secret_android") or None,
                app_secret_ios=data.get("app_secret_ios") or None,
                assets_path=_path(data.get("assetsPath", "assets"), base_dir),
                output_root=_path(data.get("outputRoot", "out"), base_dir),
                sandbox_root=_path(sandbox_root, base_dir) if sandbox_root else None,
                copy_mode=copy_mode,
                react=ReactConfig(
                    target_configs_path=_path(_required_str(react, "targetConfigsPath"), base_dir),
                    images_path=_required_str(react, "imagesPath"),
                    image_base_sizes=_sizes(react.get("imageBaseSizes", []), "react.imageBaseSizes"),
                    image_scales=_sizes(react.get("imageScales", [1]), "react.imageScales"),
                    excluded_from_scaling=_sizes(react.get("excludedFromScaling", []), "react.excludedFromScaling"),
                ),
                android=AndroidConfig(
                    target_configs_path=_path(_required_str(android, "targetConfigsPath"), base_dir),
                    android_sizes=MappingProxyType({
                        str(bucket): _positive(size, f"android.androidSizes.{bucket}")
                        for bucket, size in (android.get("androidSizes") or {}).items()
                    }),
                ),
                ios=IosConfig(
                    target_configs_path=_path(_required_str(ios, "targetConfigsPath"), base_dir),
                    splash_screen_base_image_sizes=ios_splash_sizes,
                    splash_screen_scales=_sizes(ios.get("splashScreenScales", [1]), "ios.splashScreenScales"),
                    ios_image_sizes=tuple(
                        IosImageSize(
                            size=_positive(item["size"], "ios.iosImageSizes.size"),
                            scale=_positive(item.get("scale", 1), "ios.iosImageSizes.scale"),
                        )
                        for item in ios.get("iosImageSizes", [])
                    ),
                ),
            )
        except ConfigReadError:
            raise
        except (KeyError, TypeError, AttributeError) as e:
            raise ConfigReadError(f"Invalid configuration, missing or malformed entry: {e}") from e


def _required_str(data: Dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str) or not value:
        raise ConfigReadError(f"'{key}' must be a non-empty string")
    return value


def _path(value: str, base_dir: Path) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path


def _positive(value: Any, name: str):
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigReadError(f"'{name}' must be a positive number, got {value!r}")
    return value


def _sizes(values: Any, name: str) -> tuple:
    if not isinstance(values, list):
        raise ConfigReadError(f"'{name}' must be a list")
    return tuple(_positive(v, name) for v in values)
