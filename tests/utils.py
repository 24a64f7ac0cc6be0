"""
Shared utilities for tests.
"""
import json
import plistlib
from pathlib import Path

from PIL import Image, ImageDraw

from clientforge.utils.config import ClientForgeConfig

LOGO_SVG = """<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100" viewBox="0 0 100 100">
  <circle cx="50" cy="50" r="30" fill="#ff0000"/>
</svg>
"""

ENV_TEMPLATE = (
    "# generated by template\n"
    "APP_DISPLAY_NAME=Template\n"
    "APP_VERSION=0.0.0\n"
    "BASE_URL=http://localhost\n"
    "UNRELATED=keep-me\n"
)

STORYBOARD_TEMPLATE = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<document>\n'
    '  <imageView image="NextAppSplashScreenImage"/>\n'
    '  <resources><image name="NextAppSplashScreenImage" width="200" height="200"/></resources>\n'
    '</document>\n'
)


def fake_rasterize(self, size):
    """
    Stand-in for the SVG rasterizer: a transparent square with an opaque red
    disc in the middle, so flattening and compositing can be observed.
    """
    image = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    margin = size // 4
    ImageDraw.Draw(image).ellipse((margin, margin, size - margin, size - margin), fill=(255, 0, 0, 255))
    return image


def write_overlay(path: Path, color):
    """Overlay badge: opaque colour in the top-left corner, transparent elsewhere."""
    image = Image.new("RGBA", (64, 64), (0, 0, 0, 0))
    ImageDraw.Draw(image).rectangle((0, 0, 15, 15), fill=color)
    path.parent.mkdir(parents=True, exist_ok=True)
    image.save(path, format="PNG")


def build_install_root(root: Path, client_name: str = "Acme", **overrides) -> Path:
    """
    Creates a complete, throw-away install root (assets, templates and
    config.json) under ``root`` and returns the config file path.
    """
    assets = root / "assets"
    assets.mkdir(parents=True, exist_ok=True)
    (assets / "logo_image.svg").write_text(LOGO_SVG, encoding="utf-8")
    write_overlay(assets / "aoverlay.png", (0, 0, 255, 255))
    write_overlay(assets / "boverlay.png", (0, 255, 0, 255))

    ios_template = assets / "ios" / "TargetTemplate"
    ios_template.mkdir(parents=True, exist_ok=True)
    with open(ios_template / "NextApp-Info.plist", "wb") as f:
        plistlib.dump({"CFBundleName": "NextApp", "UILaunchStoryboardName": "NextAppLaunchScreen"}, f)
    with open(ios_template / "AppCenter-Config.plist", "wb") as f:
        plistlib.dump({"AppSecret": "template-secret"}, f)
    (ios_template / "NextAppLaunchScreen.storyboard").write_text(STORYBOARD_TEMPLATE, encoding="utf-8")
    (ios_template / "xCassetsContents.json").write_text(
        json.dumps({"info": {"author": "xcode", "version": 1}}), encoding="utf-8"
    )
    (ios_template / "AppIconsContents.json").write_text(
        json.dumps({"images": [], "info": {"author": "xcode", "version": 1}}), encoding="utf-8"
    )

    react_template = root / "react" / "__template__"
    (react_template / "images").mkdir(parents=True, exist_ok=True)
    (react_template / ".env").write_text(ENV_TEMPLATE, encoding="utf-8")
    (react_template / "index.js").write_text("export default {};\n", encoding="utf-8")

    android_template = root / "android" / "NextApp"
    (android_template / "res" / "values").mkdir(parents=True, exist_ok=True)
    (android_template / "res" / "values" / "strings.xml").write_text(
        '<resources><string name="app_name">NextApp</string></resources>\n', encoding="utf-8"
    )

    (root / "ios").mkdir(parents=True, exist_ok=True)

    data = {
        "clientName": client_name,
        "env": {
            "APP_DISPLAY_NAME": client_name,
            "APP_VERSION": "1.2.3",
            "BASE_URL": "https://api.example.com",
            "AUTH_ID": "auth-id",
        },
        "react": {
            "targetConfigsPath": "react",
            "imagesPath": "images",
            "imageBaseSizes": [48, 96],
            "imageScales": [1, 2],
            "excludedFromScaling": [96],
        },
        "android": {
            "targetConfigsPath": "android",
            "androidSizes": {"drawable-mdpi": 20, "drawable-hdpi": 30},
        },
        "ios": {
            "targetConfigsPath": "ios",
            "splashScreenBaseImageSizes": [20],
            "splashScreenScales": [1, 2, 3],
            "iosImageSizes": [{"size": 1024, "scale": 1}, {"size": 20, "scale": 2}, {"size": 60, "scale": 3}],
        },
    }
    data.update(overrides)

    config_path = root / "config.json"
    config_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return config_path


def load_test_config(root: Path, **overrides):
    return ClientForgeConfig.load(build_install_root(root, **overrides))


def list_files(path: Path):
    """Relative paths of every file below path, as a set of strings."""
    return {p.relative_to(path).as_posix() for p in path.rglob("*") if p.is_file()}
