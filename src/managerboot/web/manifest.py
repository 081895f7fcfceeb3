"""Web app manifest（/admin/manifest.json）"""

from pydantic import BaseModel

from .. import __version__

ICON_CDN = "https://cdn.thoth.pub"

# (边长, density)
_ICON_SIZES = [(36, "0.75"), (48, "1.0"), (72, "1.5"), (96, "2.0"), (144, "3.0"), (192, "4.0")]


class ManifestIcon(BaseModel):
    src: str
    sizes: str
    type: str = "image/png"
    density: str


class Manifest(BaseModel):
    """Web app manifest"""

    name: str = "Thoth"
    version: str = __version__
    description: str = "Bibliographical metadata management system."
    display: str = "standalone"
    scope: str = "/admin"
    start_url: str = "."
    background_color: str = "#FFDD57"
    theme_color: str = "#FFDD57"
    icons: list[ManifestIcon] = []


def default_icons() -> list[ManifestIcon]:
    return [
        ManifestIcon(
            src=f"{ICON_CDN}/android-icon-{size}x{size}.png",
            sizes=f"{size}x{size}",
            density=density,
        )
        for size, density in _ICON_SIZES
    ]


def build_manifest(scope: str = "/admin") -> Manifest:
    """构建 manifest，scope 跟随 URL 前缀"""
    return Manifest(scope=scope, icons=default_icons())
