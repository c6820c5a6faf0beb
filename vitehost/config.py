from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from vitehost.tags import AssetMode


class AppConfig(BaseSettings):
    """
    Runtime configuration for the webserver, read once from the environment
    (and an optional `.env` file) at process start. The instance is frozen and
    passed explicitly to everything that needs it.

    ```bash
    APP_ENV=production CERT_FILE=/etc/ssl/site.pem KEY_FILE=/etc/ssl/site.key \
        DOMAIN_NAME=example.com vitehost runserver
    ```

    """

    # Only "production" switches to the built bundle. Any other value,
    # including unset, serves from the Vite dev server.
    APP_ENV: str = "development"

    CERT_FILE: str | None = None
    KEY_FILE: str | None = None
    DOMAIN_NAME: str | None = None

    VITE_ORIGIN: str = "http://localhost:5173"

    # Directory holding web/src and web/out
    PROJECT_ROOT: Path = Field(default_factory=Path.cwd)

    HOST: str = "0.0.0.0"
    PORT: int = 8080

    model_config = SettingsConfigDict(
        env_file=(".env",),
        extra="ignore",
        frozen=True,
    )

    @property
    def is_development(self) -> bool:
        return self.APP_ENV != "production"

    @property
    def asset_mode(self) -> AssetMode:
        return AssetMode.DEVELOPMENT if self.is_development else AssetMode.PRODUCTION

    @property
    def web_root(self) -> Path:
        if self.is_development:
            return self.PROJECT_ROOT / "web" / "src"
        return self.PROJECT_ROOT / "web" / "out"

    @property
    def manifest_path(self) -> Path:
        return self.web_root / ".vite" / "manifest.json"

    @property
    def tls_enabled(self) -> bool:
        return (
            not self.is_development
            and bool(self.CERT_FILE)
            and bool(self.KEY_FILE)
            and bool(self.DOMAIN_NAME)
        )
