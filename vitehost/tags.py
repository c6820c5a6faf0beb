from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Mapping

from markupsafe import Markup

from vitehost.manifest import ManifestEntry, load_manifest

if TYPE_CHECKING:
    from vitehost.config import AppConfig

VITE_CLIENT_PATH = "@vite/client"


class AssetMode(Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"


def script_tag(src: str) -> str:
    return f'<script type="module" src="{src}"></script>'


def stylesheet_tag(href: str) -> str:
    return f'<link rel="stylesheet" href="{href}">'


def missing_entry_comment(entry_point: str) -> str:
    return f"<!-- Vite entry '{entry_point}' not found in manifest -->"


def generate_tags(
    mode: AssetMode,
    manifest: Mapping[str, ManifestEntry],
    entry_points: Iterable[str],
    dev_origin: str,
) -> Markup:
    """
    Build the markup that loads the given Vite entry points.

    In development every entry is requested straight from the dev server, preceded
    by a single live-reload client tag. In production each entry resolves through
    the manifest to its hashed file, followed by the stylesheet chunks it pulls in.
    Entries that are missing from the manifest become an HTML comment so the rest
    of the page still renders.

    The result is marked as safe so it can be injected verbatim into a template.

    """
    tags: list[str] = []

    if mode == AssetMode.DEVELOPMENT:
        tags.append(script_tag(f"{dev_origin}/{VITE_CLIENT_PATH}"))
        for entry_point in entry_points:
            tags.append(script_tag(f"{dev_origin}/{entry_point}"))
        return Markup("".join(tags))

    for entry_point in entry_points:
        entry = manifest.get(entry_point)
        if entry is None:
            tags.append(missing_entry_comment(entry_point))
            continue

        tags.append(script_tag(f"/{entry.file}"))
        for css_file in entry.css:
            tags.append(stylesheet_tag(f"/{css_file}"))

    return Markup("".join(tags))


class ViteAssets:
    """
    Read-only snapshot of everything the tag generator consults. Built once at
    startup and shared by every request handler.

    """

    def __init__(
        self,
        *,
        mode: AssetMode,
        dev_origin: str,
        manifest: Mapping[str, ManifestEntry] | None = None,
    ):
        self.mode = mode
        self.dev_origin = dev_origin
        self.manifest: Mapping[str, ManifestEntry] = MappingProxyType(
            dict(manifest or {})
        )

    @classmethod
    def from_config(cls, config: "AppConfig") -> "ViteAssets":
        # The dev server resolves modules itself, so the manifest is only
        # needed for production builds
        manifest = (
            load_manifest(config.manifest_path)
            if config.asset_mode == AssetMode.PRODUCTION
            else {}
        )
        return cls(
            mode=config.asset_mode,
            dev_origin=config.VITE_ORIGIN,
            manifest=manifest,
        )

    def tags(self, *entry_points: str) -> Markup:
        return generate_tags(self.mode, self.manifest, entry_points, self.dev_origin)
