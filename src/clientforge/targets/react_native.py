import logging
from pathlib import Path

from clientforge.models import ClientConfig
from clientforge.targets.base import TargetPreparer
from clientforge.utils.file_utils import FileUtils

logger = logging.getLogger(__name__)

TEMPLATE_FOLDER = "__template__"
ENV_FILE = ".env"
LOGO_FILE = "logo_image.svg"


class ReactNativePreparer(TargetPreparer):
    name = "React Native"

    def client_path(self, config: ClientConfig) -> Path:
        return config.react.target_configs_path / config.client_name.lower()

    def _prepare(self, config: ClientConfig, files: FileUtils, client_path: Path) -> None:
        files.copy_folder(config.react.target_configs_path / TEMPLATE_FOLDER, client_path)

        self.create_patcher(files).update_env_file(config.env, client_path / ENV_FILE)
        files.copy_file(config.logo_path, client_path / config.react.images_path / LOGO_FILE)

        self._generate_images(config, files, client_path)

    def _update(self, config: ClientConfig, files: FileUtils, client_path: Path) -> None:
        self.create_patcher(files).update_env_file(config.env, client_path / ENV_FILE)
        files.update_file(config.logo_path, client_path / config.react.images_path / LOGO_FILE)

        self._generate_images(config, files, client_path)

    def _generate_images(self, config: ClientConfig, files: FileUtils, client_path: Path) -> None:
        logger.info("Generating React Native image assets")
        renderer = self.create_renderer(config, files)
        renderer.generate_image_set(
            client_path / config.react.images_path,
            config.react.image_base_sizes,
            config.react.image_scales,
            config.react.excluded_from_scaling,
        )
