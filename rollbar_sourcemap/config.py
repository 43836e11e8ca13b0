from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rollbar_sourcemap.constants import ROLLBAR_ENDPOINT
from rollbar_sourcemap.types import RollbarSourceMapOptions


class Settings(BaseSettings):
    """Plugin settings loaded from ROLLBAR_* environment variables.

    Used by the command-line entry point; library callers usually build
    RollbarSourceMapOptions directly. Empty required values are left empty
    so the plugin's own validation reports them.
    """

    model_config = SettingsConfigDict(
        env_prefix="ROLLBAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    access_token: str = ""
    version: str = ""
    public_path: str = ""

    # Comma-separated chunk names, e.g. "app,vendor". Empty uploads all chunks.
    include_chunks: str = ""

    endpoint: str = ROLLBAR_ENDPOINT

    silent: bool = False
    ignore_errors: bool = False
    encode_filename: bool = False

    # Console log output instead of JSON
    debug: bool = False

    @field_validator("endpoint", mode="before")
    @classmethod
    def default_blank_endpoint(cls, v: str) -> str:
        return v or ROLLBAR_ENDPOINT

    def chunk_names(self) -> list[str]:
        return [name.strip() for name in self.include_chunks.split(",") if name.strip()]

    def to_options(self) -> RollbarSourceMapOptions:
        return RollbarSourceMapOptions(
            access_token=self.access_token,
            version=self.version,
            public_path=self.public_path,
            include_chunks=self.chunk_names(),
            silent=self.silent,
            ignore_errors=self.ignore_errors,
            rollbar_endpoint=self.endpoint,
            encode_filename=self.encode_filename,
        )


def get_settings() -> Settings:
    return Settings()
