import logging
from pathlib import Path

from clientforge.models import ClientConfig
from clientforge.renderer.image_renderer import WHITE
from clientforge.targets.base import TargetPreparer
from clientforge.utils.file_utils import FileUtils

logger = logging.getLogger(__name__)

TEMPLATE_FOLDER = "NextApp"
LOGO_FILE = "logo_image.svg"
PLAYSTORE_ICON = "ic_launcher-playstore.png"
APPCENTER_CONFIG = Path("assets") / "appcenter-config.json"


class AndroidPreparer(TargetPreparer):
    name = "Android"

    def client_path(self, config: ClientConfig) -> Path:
        return config.android.target_configs_path / config.client_name

    def extras_path(self, config: ClientConfig) -> Path:
        """Store/marketing images that live outside the client workspace."""
        return config.output_root / config.client_name.lower()

    def _prepare(self, config: ClientConfig, files: FileUtils, client_path: Path) -> None:
        files.copy_folder(config.android.target_configs_path / TEMPLATE_FOLDER, client_path)
        files.copy_file(config.logo_path, client_path / "res" / LOGO_FILE)
        self._apply_app_secret(config, files, client_path)

        self._generate_images(config, files, client_path)

    def _update(self, config: ClientConfig, files: FileUtils, client_path: Path) -> None:
        files.update_file(config.logo_path, client_path / "res" / LOGO_FILE)
        self._apply_app_secret(config, files, client_path)

        self._generate_images(config, files, client_path)

    def _apply_app_secret(self, config: ClientConfig, files: FileUtils, client_path: Path) -> None:
        if not config.app_secret_android:
            logger.debug("No Android App Center secret configured, skipping")
            return
        self.create_patcher(files).write_appcenter_config(client_path / APPCENTER_CONFIG, config.app_secret_android)

    def _generate_images(self, config: ClientConfig, files: FileUtils, client_path: Path) -> None:
        logger.info("Generating Android image assets")
        renderer = self.create_renderer(config, files)
        extras = self.extras_path(config)

        renderer.generate_android_image_set(client_path / "res")
        renderer.save_converted_svg(client_path / PLAYSTORE_ICON, 512, WHITE)
        renderer.save_converted_svg(extras / "logo_image_2046_wbg.png", 2046, WHITE)
        renderer.save_converted_svg(extras / "logo_image_512_wbg.png", 512, WHITE)
        renderer.save_converted_svg(extras / "logo_image_aoverlay.png", 512, None, config.alpha_overlay_path)
        renderer.save_converted_svg(extras / "logo_image_boverlay.png", 512, None, config.beta_overlay_path)
