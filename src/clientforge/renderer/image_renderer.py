import io
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from PIL import Image, ImageColor

from clientforge.errors import AssetNotFoundError, ConversionFailedError
from clientforge.models import ClientConfig, Number, format_number, pixel_size
from clientforge.utils.file_utils import FileUtils
from clientforge.utils.paths import PathLike

logger = logging.getLogger(__name__)

WHITE = "#ffffff"
MARKETING_ICON_SIZE = 1024


class ImageRenderer:
    """
    Rasterizes one source SVG into the PNG variants each platform needs.

    The SVG is read once when the renderer is created and reused, read-only,
    by every conversion.
    """

    def __init__(self, config: ClientConfig, svg_path: PathLike, files: Optional[FileUtils] = None):
        self.config = config
        self.files = files or FileUtils.from_config(config)
        self.svg_path = self.files.resolve(svg_path)
        self.source_svg = self._read_file(self.svg_path)

    def _read_file(self, path: Path) -> bytes:
        if not self.files.file_exists(path):
            raise AssetNotFoundError(path)
        try:
            return path.read_bytes()
        except OSError as e:
            raise AssetNotFoundError(path) from e

    def _rasterize(self, size: int) -> Image.Image:
        import cairosvg

        png = cairosvg.svg2png(bytestring=self.source_svg, output_width=size, output_height=size)
        return Image.open(io.BytesIO(png))

    def convert(
        self,
        size: int,
        background_color_hex: Optional[str] = None,
        overlay_image_path: Optional[PathLike] = None,
    ) -> Image.Image:
        """
        Renders the SVG at size x size.

        With a background colour the transparency is flattened onto it and the
        result is opaque RGB. With an overlay, the overlay is scaled to the
        same box and composited centred on top.
        """
        overlay_path = None
        if overlay_image_path is not None:
            overlay_path = self.files.resolve(overlay_image_path)
            if not self.files.file_exists(overlay_path):
                raise AssetNotFoundError(overlay_path)

        try:
            image = self._rasterize(size).convert("RGBA")
            if image.size != (size, size):
                image = image.resize((size, size), Image.Resampling.LANCZOS)

            if background_color_hex:
                background = Image.new("RGBA", (size, size), ImageColor.getcolor(background_color_hex, "RGBA"))
                background.alpha_composite(image)
                image = background

            if overlay_path is not None:
                with Image.open(overlay_path) as overlay_source:
                    overlay = overlay_source.convert("RGBA").resize((size, size), Image.Resampling.LANCZOS)
                offset = ((size - overlay.width) // 2, (size - overlay.height) // 2)
                image.alpha_composite(overlay, dest=offset)

            if background_color_hex:
                image = image.convert("RGB")
            return image
        except Exception as e:
            raise ConversionFailedError(f"Failed to convert SVG to PNG: {e}") from e

    def save_converted_svg(
        self,
        output_path: PathLike,
        size: int,
        background_color_hex: Optional[str] = None,
        overlay_image_path: Optional[PathLike] = None,
    ) -> Path:
        output = self.files.resolve(output_path)
        self.files.create_directory(output.parent)

        image = self.convert(size, background_color_hex, overlay_image_path)
        self._write_png(image, output)
        return output

    def _write_png(self, image: Image.Image, output: Path) -> None:
        try:
            # explicit format, some outputs (iTunesArtwork) have no extension
            image.save(output, format="PNG")
        except OSError as e:
            logger.error(f"Failed to save file: {output}. Error: {e}")
            raise
        logger.debug(f"Wrote {output} ({image.width}x{image.height})")

    def generate_image_set(
        self,
        output_path: PathLike,
        image_base_sizes: Iterable[int],
        image_scales: Iterable[Number],
        excluded_sizes: Iterable[int] = (),
        output_image_prefix: str = "logo_image_",
        include_size_in_file_name: bool = True,
    ) -> List[Path]:
        """
        Writes ``{prefix}[{size}][@{scale}x].png`` for every base size and
        scale. Excluded sizes only get the 1x variant.
        """
        output_dir = self.files.create_directory(output_path)
        excluded = set(excluded_sizes)
        scales = list(image_scales)
        written = []

        for base_size in image_base_sizes:
            file_name = output_image_prefix
            if include_size_in_file_name:
                file_name += format_number(base_size)

            scales_to_use = [1] if base_size in excluded else scales
            for scale in scales_to_use:
                suffix = "" if scale == 1 else f"@{format_number(scale)}x"
                output_file = output_dir / f"{file_name}{suffix}.png"
                self._write_png(self.convert(pixel_size(base_size, scale)), output_file)
                written.append(output_file)

        logger.info(f"Generated {len(written)} images in {output_dir}")
        return written

    def generate_ios_image_set(self, output_path: PathLike, overlay_path: Optional[PathLike] = None) -> List[Path]:
        output_dir = self.files.create_directory(output_path)
        written = []

        for item in self.config.ios.ios_image_sizes:
            if item.size == MARKETING_ICON_SIZE:
                # App Store icon: plain render, never badged
                output_file = output_dir / f"MarketingIcon{MARKETING_ICON_SIZE}.png"
                image = self.convert(pixel_size(item.size, item.scale))
            else:
                output_file = output_dir / f"Icon-{format_number(item.size)}@{format_number(item.scale)}x.png"
                image = self.convert(pixel_size(item.size, item.scale), WHITE, overlay_path)
            self._write_png(image, output_file)
            written.append(output_file)

        logger.info(f"Generated {len(written)} iOS icons in {output_dir}")
        return written

    def generate_android_image_set(
        self,
        output_path: PathLike,
        splashscreen_image_name: str = "splashscreen_image.png",
    ) -> List[Path]:
        output_dir = self.files.create_directory(output_path)
        written = []

        for folder, size in self.config.android.android_sizes.items():
            folder_path = self.files.create_directory(output_dir / folder)
            output_file = folder_path / splashscreen_image_name
            self._write_png(self.convert(pixel_size(size)), output_file)
            written.append(output_file)

        logger.info(f"Generated {len(written)} Android splash images in {output_dir}")
        return written
