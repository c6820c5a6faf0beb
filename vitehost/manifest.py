from os import PathLike
from pathlib import Path

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from vitehost.logging import LOGGER, log_time_duration

MANIFEST_FILENAME = "manifest.json"


class ManifestEntry(BaseModel):
    """
    One record of the Vite build manifest, keyed in the manifest by the logical
    source path of the entry (ie. "ts/main.ts").

    ```json
    {
        "ts/main.ts": {
            "file": "assets/main.abc123.js",
            "src": "ts/main.ts",
            "css": ["assets/main.abc123.css"],
            "isEntry": true
        }
    }
    ```

    """

    # Content-hashed output path, relative to the web root
    file: str
    src: str = ""

    # Stylesheet chunks pulled in by this entry, in build order
    css: tuple[str, ...] = ()

    is_entry: bool = Field(default=False, alias="isEntry")

    model_config = {
        "extra": "ignore",
        "frozen": True,
        "populate_by_name": True,
    }


Manifest = dict[str, ManifestEntry]

MANIFEST_ADAPTER = TypeAdapter(Manifest)


def fallback_manifest_path(primary_path: PathLike | str) -> Path:
    """
    Older Vite versions write the manifest to the root of the output directory
    instead of the `.vite` metadata folder. Given `<web_root>/.vite/manifest.json`
    this resolves to `<web_root>/manifest.json`.

    """
    return Path(primary_path).parent.parent / MANIFEST_FILENAME


def load_manifest(
    primary_path: PathLike | str,
    into: Manifest | None = None,
) -> Manifest:
    """
    Load the build manifest from disk. A missing or malformed manifest never
    raises: pages still render, just without their production asset tags. Both
    failure modes log a single warning and leave the manifest empty.

    :param primary_path: Conventionally `<web_root>/.vite/manifest.json`
    :param into: Optional mapping to populate in place. Left untouched on failure.

    :return: The populated manifest

    """
    manifest: Manifest = into if into is not None else {}
    primary_path = Path(primary_path)

    with log_time_duration(f"Load manifest {primary_path}"):
        try:
            raw_manifest = primary_path.read_bytes()
        except OSError as primary_error:
            fallback_path = fallback_manifest_path(primary_path)
            LOGGER.debug(
                f"Manifest not found at {primary_path}, trying {fallback_path}"
            )
            try:
                raw_manifest = fallback_path.read_bytes()
            except OSError:
                LOGGER.warning(
                    f"Could not read manifest.json at {primary_path}: {primary_error}"
                )
                return manifest

        try:
            parsed = MANIFEST_ADAPTER.validate_json(raw_manifest)
        except ValidationError as e:
            LOGGER.warning(f"Could not parse manifest.json: {e}")
            return manifest

    manifest.update(parsed)
    LOGGER.debug(f"Loaded {len(parsed)} manifest entries")
    return manifest
