import logging
from pathlib import Path
from typing import List, Optional, Tuple

from clientforge.models import ClientConfig
from clientforge.renderer.image_renderer import WHITE
from clientforge.targets.base import TargetPreparer
from clientforge.utils.file_utils import FileUtils

logger = logging.getLogger(__name__)

TEMPLATE_CLIENT_NAME = "NextApp"
APPCENTER_PLIST = "AppCenter-Config.plist"
XCASSETS_CONTENTS_TEMPLATE = "xCassetsContents.json"
APP_ICONS_CONTENTS_TEMPLATE = "AppIconsContents.json"
CONTENTS_JSON = "Contents.json"


class IosPreparer(TargetPreparer):
    name = "iOS"

    def client_path(self, config: ClientConfig) -> Path:
        return config.ios.target_configs_path / config.client_name

    # Per-client names
    def info_plist_path(self, config: ClientConfig, client_path: Path) -> Path:
        return client_path / f"{config.client_name}-Info.plist"

    def storyboard_path(self, config: ClientConfig, client_path: Path) -> Path:
        return client_path / f"{config.client_name}LaunchScreen.storyboard"

    def xcassets_path(self, config: ClientConfig, client_path: Path) -> Path:
        return client_path / f"{config.client_name}Images.xcassets"

    def splash_image_name(self, config: ClientConfig) -> str:
        return f"{config.client_name}SplashScreenImage"

    def app_icon_sets(self, config: ClientConfig) -> List[Tuple[str, Optional[Path]]]:
        """Icon set folder names with the overlay badge each one carries."""
        return [
            (f"{config.client_name}AppIcons.appiconset", None),
            (f"{config.client_name}AppIconsAlpha.appiconset", config.alpha_overlay_path),
            (f"{config.client_name}AppIconsBeta.appiconset", config.beta_overlay_path),
        ]

    def _prepare(self, config: ClientConfig, files: FileUtils, client_path: Path) -> None:
        template = config.ios_template_path
        files.create_directory(client_path)

        files_to_copy = [
            (APPCENTER_PLIST, APPCENTER_PLIST),
            (f"{TEMPLATE_CLIENT_NAME}-Info.plist", self.info_plist_path(config, client_path).name),
            (f"{TEMPLATE_CLIENT_NAME}LaunchScreen.storyboard", self.storyboard_path(config, client_path).name),
        ]
        for src, dest in files_to_copy:
            logger.info(f"Copying {src} to {dest}")
            files.copy_file(template / src, client_path / dest)

        self._patch_templates(config, files, client_path)

        xcassets = files.create_directory(self.xcassets_path(config, client_path))
        files.copy_file(template / XCASSETS_CONTENTS_TEMPLATE, xcassets / CONTENTS_JSON)
        for icon_set, _ in self.app_icon_sets(config):
            icon_set_path = files.create_directory(xcassets / icon_set)
            files.copy_file(template / APP_ICONS_CONTENTS_TEMPLATE, icon_set_path / CONTENTS_JSON)

        self._write_splash_contents(config, files, client_path)
        self._generate_images(config, files, client_path)

    def _update(self, config: ClientConfig, files: FileUtils, client_path: Path) -> None:
        template = config.ios_template_path
        xcassets = self.xcassets_path(config, client_path)

        files.update_file(template / XCASSETS_CONTENTS_TEMPLATE, xcassets / CONTENTS_JSON)
        for icon_set, _ in self.app_icon_sets(config):
            files.update_file(template / APP_ICONS_CONTENTS_TEMPLATE, xcassets / icon_set / CONTENTS_JSON)

        self._write_splash_contents(config, files, client_path)
        self._patch_templates(config, files, client_path)
        self._generate_images(config, files, client_path)

    def _patch_templates(self, config: ClientConfig, files: FileUtils, client_path: Path) -> None:
        patcher = self.create_patcher(files)
        patcher.set_plist_values(
            self.info_plist_path(config, client_path),
            {"UILaunchStoryboardName": f"{config.client_name}LaunchScreen"},
        )
        patcher.replace_in_file(
            self.storyboard_path(config, client_path),
            f"{TEMPLATE_CLIENT_NAME}SplashScreenImage",
            self.splash_image_name(config),
        )
        if config.app_secret_ios:
            patcher.set_plist_values(client_path / APPCENTER_PLIST, {"AppSecret": config.app_secret_ios})

    def _write_splash_contents(self, config: ClientConfig, files: FileUtils, client_path: Path) -> None:
        splash_set = self.xcassets_path(config, client_path) / f"{self.splash_image_name(config)}.imageset"
        self.create_patcher(files).write_splash_contents_json(
            splash_set, self.splash_image_name(config), config.ios.splash_screen_scales
        )

    def _generate_images(self, config: ClientConfig, files: FileUtils, client_path: Path) -> None:
        logger.info("Generating iOS image assets")
        renderer = self.create_renderer(config, files)
        xcassets = self.xcassets_path(config, client_path)

        for icon_set, overlay in self.app_icon_sets(config):
            logger.info(f"Generating iOS image set for {icon_set}")
            renderer.generate_ios_image_set(xcassets / icon_set, overlay)

        renderer.generate_image_set(
            xcassets / f"{self.splash_image_name(config)}.imageset",
            config.ios.splash_screen_base_image_sizes,
            config.ios.splash_screen_scales,
            (),
            self.splash_image_name(config),
            False,
        )

        renderer.save_converted_svg(client_path / "iTunesArtwork", 512, WHITE)
        renderer.save_converted_svg(client_path / "iTunesArtwork@2x", 1024, WHITE)
