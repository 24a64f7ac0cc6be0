from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

Number = Union[int, float]


class CopyMode(str, Enum):
    OVERWRITE = "overwrite"
    EXCLUSIVE = "exclusive"


@dataclass(frozen=True)
class IosImageSize:
    size: Number
    scale: Number


@dataclass(frozen=True)
class ReactConfig:
    target_configs_path: Path
    images_path: str
    image_base_sizes: Tuple[int, ...] = ()
    image_scales: Tuple[Number, ...] = (1,)
    excluded_from_scaling: Tuple[int, ...] = ()


@dataclass(frozen=True)
class AndroidConfig:
    target_configs_path: Path
    # density bucket -> pixel size, in config order
    android_sizes: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True)
class IosConfig:
    target_configs_path: Path
    splash_screen_base_image_sizes: Tuple[int, ...] = ()
    splash_screen_scales: Tuple[Number, ...] = (1,)
    ios_image_sizes: Tuple[IosImageSize, ...] = ()


@dataclass(frozen=True)
class ClientConfig:
    client_name: str
    react: ReactConfig
    android: AndroidConfig
    ios: IosConfig
    assets_path: Path
    output_root: Path
    env: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    app_secret_android: Optional[str] = None
    app_secret_ios: Optional[str] = None
    sandbox_root: Optional[Path] = None
    copy_mode: CopyMode = CopyMode.OVERWRITE

    @property
    def logo_path(self) -> Path:
        return self.assets_path / "logo_image.svg"

    @property
    def alpha_overlay_path(self) -> Path:
        return self.assets_path / "aoverlay.png"

    @property
    def beta_overlay_path(self) -> Path:
        return self.assets_path / "boverlay.png"

    @property
    def ios_template_path(self) -> Path:
        return self.assets_path / "ios" / "TargetTemplate"

    def __str__(self):
        return (
            f"Client: {self.client_name}\n"
            f"React Native: {self.react.target_configs_path}\n"
            f"Android: {self.android.target_configs_path}\n"
            f"iOS: {self.ios.target_configs_path}"
        )


def format_number(value: Number) -> str:
    """Render a size or scale for use in a file name (``2`` rather than ``2.0``)."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def pixel_size(base: Number, scale: Number = 1) -> int:
    return int(round(base * scale))
