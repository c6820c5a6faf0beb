from vitehost.app import WebController as WebController, build_app as build_app
from vitehost.config import AppConfig as AppConfig
from vitehost.manifest import (
    Manifest as Manifest,
    ManifestEntry as ManifestEntry,
    fallback_manifest_path as fallback_manifest_path,
    load_manifest as load_manifest,
)
from vitehost.pages import Page as Page, PageRender as PageRender
from vitehost.tags import (
    AssetMode as AssetMode,
    ViteAssets as ViteAssets,
    generate_tags as generate_tags,
)
