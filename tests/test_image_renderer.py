import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from PIL import Image

from clientforge.errors import AssetNotFoundError, ConversionFailedError
from clientforge.renderer.image_renderer import ImageRenderer
from tests.utils import fake_rasterize, load_test_config

try:
    import cairosvg  # noqa: F401
    HAS_CAIROSVG = True
except (ImportError, OSError):
    # cairosvg needs the native cairo library
    HAS_CAIROSVG = False


class TestImageRenderer(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.test_path = Path(self.test_dir).resolve()
        self.config = load_test_config(self.test_path)
        self.out = self.test_path / "out"

        patcher = patch.object(ImageRenderer, "_rasterize", fake_rasterize)
        patcher.start()
        self.addCleanup(patcher.stop)

        self.renderer = ImageRenderer(self.config, self.config.logo_path)

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def _names(self, paths):
        return sorted(p.name for p in paths)

    def assertColorClose(self, actual, expected, tolerance=8):
        """Resampling rounds, so compare channels with some slack."""
        self.assertEqual(len(actual), len(expected))
        for got, want in zip(actual, expected):
            self.assertLessEqual(abs(got - want), tolerance, f"{actual} != {expected}")

    def test_missing_svg(self):
        with self.assertRaises(AssetNotFoundError):
            ImageRenderer(self.config, self.test_path / "missing.svg")

    def test_svg_path_must_be_a_file(self):
        with self.assertRaises(AssetNotFoundError):
            ImageRenderer(self.config, self.test_path / "assets")

    def test_convert_keeps_transparency_without_background(self):
        image = self.renderer.convert(40)
        self.assertEqual(image.size, (40, 40))
        self.assertEqual(image.mode, "RGBA")
        self.assertEqual(image.getpixel((0, 0))[3], 0)
        self.assertEqual(image.getpixel((20, 20)), (255, 0, 0, 255))

    def test_convert_flattens_on_background(self):
        image = self.renderer.convert(40, "#ffffff")
        self.assertEqual(image.mode, "RGB")
        self.assertEqual(image.getpixel((0, 0)), (255, 255, 255))
        self.assertEqual(image.getpixel((20, 20)), (255, 0, 0))

    def test_convert_composites_overlay(self):
        # overlay is 64px with a 16px blue corner; scaled to 32px the corner is 8px
        image = self.renderer.convert(32, "#ffffff", self.config.alpha_overlay_path)
        self.assertEqual(image.size, (32, 32))
        self.assertColorClose(image.getpixel((2, 2)), (0, 0, 255))
        self.assertColorClose(image.getpixel((16, 16)), (255, 0, 0))
        self.assertColorClose(image.getpixel((31, 0)), (255, 255, 255))

    def test_convert_missing_overlay(self):
        with self.assertRaises(AssetNotFoundError):
            self.renderer.convert(32, None, self.test_path / "nope.png")

    def test_convert_wraps_rasterizer_errors(self):
        with patch.object(ImageRenderer, "_rasterize", side_effect=ValueError("broken svg")):
            with self.assertRaises(ConversionFailedError) as ctx:
                self.renderer.convert(32)
        self.assertIn("broken svg", str(ctx.exception))

    def test_save_converted_svg_creates_directory(self):
        output = self.out / "nested" / "iTunesArtwork"
        self.renderer.save_converted_svg(output, 64, "#ffffff")

        with Image.open(output) as image:
            self.assertEqual(image.format, "PNG")
            self.assertEqual(image.size, (64, 64))

    def test_generate_image_set_with_excluded_size(self):
        written = self.renderer.generate_image_set(self.out, [48, 96], [1, 2], [96], "logo_", True)

        self.assertEqual(self._names(written), ["logo_48.png", "logo_48@2x.png", "logo_96.png"])
        self.assertEqual(sorted(p.name for p in self.out.iterdir()), ["logo_48.png", "logo_48@2x.png", "logo_96.png"])
        with Image.open(self.out / "logo_48@2x.png") as image:
            self.assertEqual(image.size, (96, 96))

    def test_generate_image_set_without_size_in_name(self):
        written = self.renderer.generate_image_set(self.out, [20], [1, 2, 3], [], "AcmeSplashScreenImage", False)

        self.assertEqual(
            self._names(written),
            ["AcmeSplashScreenImage.png", "AcmeSplashScreenImage@2x.png", "AcmeSplashScreenImage@3x.png"],
        )
        with Image.open(self.out / "AcmeSplashScreenImage@3x.png") as image:
            self.assertEqual(image.size, (60, 60))

    def test_generate_image_set_fractional_scale(self):
        written = self.renderer.generate_image_set(self.out, [10], [1.5, 2.0], [], "logo_", True)

        self.assertEqual(self._names(written), ["logo_10@1.5x.png", "logo_10@2x.png"])
        with Image.open(self.out / "logo_10@1.5x.png") as image:
            self.assertEqual(image.size, (15, 15))

    def test_generate_ios_image_set(self):
        written = self.renderer.generate_ios_image_set(self.out, self.config.alpha_overlay_path)

        self.assertEqual(self._names(written), ["Icon-20@2x.png", "Icon-60@3x.png", "MarketingIcon1024.png"])
        with Image.open(self.out / "Icon-60@3x.png") as icon:
            self.assertEqual(icon.size, (180, 180))
            self.assertEqual(icon.mode, "RGB")
            self.assertColorClose(icon.getpixel((2, 2)), (0, 0, 255))

    def test_marketing_icon_is_not_flattened_or_badged(self):
        self.renderer.generate_ios_image_set(self.out, self.config.alpha_overlay_path)

        with Image.open(self.out / "MarketingIcon1024.png") as marketing:
            self.assertEqual(marketing.size, (1024, 1024))
            self.assertEqual(marketing.mode, "RGBA")
            # corner stays transparent: no white flatten, no blue badge
            self.assertEqual(marketing.getpixel((2, 2))[3], 0)

    def test_generate_android_image_set(self):
        written = self.renderer.generate_android_image_set(self.out / "res")

        self.assertEqual(
            sorted(p.relative_to(self.out).as_posix() for p in written),
            ["res/drawable-hdpi/splashscreen_image.png", "res/drawable-mdpi/splashscreen_image.png"],
        )
        with Image.open(self.out / "res" / "drawable-hdpi" / "splashscreen_image.png") as image:
            self.assertEqual(image.size, (30, 30))

    def test_generate_android_image_set_custom_name(self):
        written = self.renderer.generate_android_image_set(self.out, "splash.png")
        self.assertEqual(self._names(written), ["splash.png", "splash.png"])


@unittest.skipUnless(HAS_CAIROSVG, "cairosvg or the cairo library is not available")
class TestCairoRasterizer(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.test_path = Path(self.test_dir).resolve()
        self.config = load_test_config(self.test_path)

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_real_svg_rendering(self):
        renderer = ImageRenderer(self.config, self.config.logo_path)
        image = renderer.convert(50, "#ffffff")

        self.assertEqual(image.size, (50, 50))
        self.assertEqual(image.getpixel((0, 0)), (255, 255, 255))
        red, green, blue = image.getpixel((25, 25))
        self.assertGreater(red, 200)
        self.assertLess(green, 50)
        self.assertLess(blue, 50)


if __name__ == '__main__':
    unittest.main()
