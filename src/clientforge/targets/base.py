import logging
from abc import ABC, abstractmethod
from pathlib import Path

from clientforge.errors import ClientAlreadyExistsError, ClientNotFoundError
from clientforge.models import ClientConfig
from clientforge.renderer.image_renderer import ImageRenderer
from clientforge.utils.file_utils import FileUtils
from clientforge.utils.templates import TemplatePatcher

logger = logging.getLogger(__name__)


class TargetPreparer(ABC):
    """
    Creates (prepare) or refreshes (update) one client workspace for a platform.

    Subclasses only describe the platform specific steps; the existence
    checks, logging and error reporting live here.
    """

    name = "Target"

    @abstractmethod
    def client_path(self, config: ClientConfig) -> Path:
        """Location of the client's workspace for this platform."""
        pass

    @abstractmethod
    def _prepare(self, config: ClientConfig, files: FileUtils, client_path: Path) -> None:
        pass

    @abstractmethod
    def _update(self, config: ClientConfig, files: FileUtils, client_path: Path) -> None:
        pass

    def prepare(self, config: ClientConfig) -> Path:
        files = FileUtils.from_config(config)
        try:
            client_path = files.resolve(self.client_path(config))
            if files.folder_exists(client_path):
                raise ClientAlreadyExistsError(config.client_name, client_path)

            logger.info(f"Preparing {self.name} target for {config.client_name}")
            self._prepare(config, files, client_path)
        except Exception as e:
            logger.error(f"Error preparing {self.name} target: {e}")
            raise
        logger.info(f"{self.name} target prepared successfully for {config.client_name}")
        return client_path

    def update(self, config: ClientConfig) -> Path:
        files = FileUtils.from_config(config)
        try:
            client_path = files.resolve(self.client_path(config))
            if not files.folder_exists(client_path):
                raise ClientNotFoundError(config.client_name, client_path)

            logger.info(f"Updating {self.name} target for {config.client_name}")
            self._update(config, files, client_path)
        except Exception as e:
            logger.error(f"Error updating {self.name} target: {e}")
            raise
        logger.info(f"{self.name} target updated successfully for {config.client_name}")
        return client_path

    def create_renderer(self, config: ClientConfig, files: FileUtils) -> ImageRenderer:
        return ImageRenderer(config, config.logo_path, files)

    def create_patcher(self, files: FileUtils) -> TemplatePatcher:
        return TemplatePatcher(files)
