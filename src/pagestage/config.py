"""Configuration management for Pagestage.

Supports TOML configuration format with auto-discovery. The PORT
environment variable overrides the configured port.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from pagestage.errors import ConfigError

CONFIG_FILENAME = "pagestage.toml"
PORT_ENV_VAR = "PORT"
DEFAULT_PORT = 3500


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT


@dataclass
class SiteConfig:
    """Site layout configuration."""

    document_root: Path = field(default_factory=lambda: Path("views"))
    asset_root: Path = field(default_factory=lambda: Path("."))
    not_found_page: str = "404.html"


@dataclass
class LogConfig:
    """Request and error log configuration."""

    log_dir: Path = field(default_factory=lambda: Path("logs"))
    request_log: str = "reqLog.txt"
    error_log: str = "errLog.txt"


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    site: SiteConfig
    logs: LogConfig
    config_path: Path | None = None

    @classmethod
    def load(
        cls,
        config_path: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> Config:
        """Load configuration from file and environment.

        If config_path is provided, loads from that file.
        Otherwise, searches for pagestage.toml in current directory and parents.
        A PORT environment variable takes precedence over the file.

        Args:
            config_path: Optional explicit path to config file
            environ: Environment to read PORT from (default: os.environ)

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ConfigError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            config = cls._load_from_file(config_path)
        else:
            discovered_path = cls._discover_config()
            if discovered_path is None:
                config = cls._default()
            else:
                config = cls._load_from_file(discovered_path)

        return config._apply_environment(os.environ if environ is None else environ)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> Config:
        """Create config with all defaults.

        Returns:
            Config instance with default values
        """
        return cls(server=ServerConfig(), site=SiteConfig(), logs=LogConfig())

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ConfigError: If configuration is invalid
        """
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            site=cls._parse_site(data.get("site"), config_dir),
            logs=cls._parse_logs(data.get("logs"), config_dir),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ConfigError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ConfigError("server.host must be a string")

        port = data.get("port", DEFAULT_PORT)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ConfigError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_site(cls, data: object, config_dir: Path) -> SiteConfig:
        """Parse site configuration section.

        Args:
            data: Raw site section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            SiteConfig instance
        """
        if data is None:
            return SiteConfig(
                document_root=config_dir / "views",
                asset_root=config_dir,
            )

        if not isinstance(data, dict):
            raise ConfigError("site section must be a dictionary")

        document_root = data.get("document_root", "views")
        if not isinstance(document_root, str):
            raise ConfigError("site.document_root must be a string")

        asset_root = data.get("asset_root", ".")
        if not isinstance(asset_root, str):
            raise ConfigError("site.asset_root must be a string")

        not_found_page = data.get("not_found_page", "404.html")
        if not isinstance(not_found_page, str) or not not_found_page:
            raise ConfigError("site.not_found_page must be a non-empty string")
        if "/" in not_found_page:
            raise ConfigError("site.not_found_page must be a file name, not a path")

        return SiteConfig(
            document_root=config_dir / document_root,
            asset_root=config_dir / asset_root,
            not_found_page=not_found_page,
        )

    @classmethod
    def _parse_logs(cls, data: object, config_dir: Path) -> LogConfig:
        """Parse logs configuration section.

        Args:
            data: Raw logs section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            LogConfig instance
        """
        if data is None:
            return LogConfig(log_dir=config_dir / "logs")

        if not isinstance(data, dict):
            raise ConfigError("logs section must be a dictionary")

        log_dir = data.get("log_dir", "logs")
        if not isinstance(log_dir, str):
            raise ConfigError("logs.log_dir must be a string")

        request_log = data.get("request_log", "reqLog.txt")
        if not isinstance(request_log, str):
            raise ConfigError("logs.request_log must be a string")

        error_log = data.get("error_log", "errLog.txt")
        if not isinstance(error_log, str):
            raise ConfigError("logs.error_log must be a string")

        return LogConfig(
            log_dir=config_dir / log_dir,
            request_log=request_log,
            error_log=error_log,
        )

    def _apply_environment(self, environ: Mapping[str, str]) -> Config:
        raw_port = environ.get(PORT_ENV_VAR)
        if not raw_port:
            return self
        try:
            port = int(raw_port)
        except ValueError as e:
            msg = f"{PORT_ENV_VAR} must be an integer, got {raw_port!r}"
            raise ConfigError(msg) from e
        return self.with_overrides(port=port)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        document_root: Path | None = None,
        asset_root: Path | None = None,
        log_dir: Path | None = None,
    ) -> Config:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            document_root: Override site.document_root
            asset_root: Override site.asset_root
            log_dir: Override logs.log_dir

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        site = self.site
        if document_root is not None:
            site = replace(site, document_root=document_root)
        if asset_root is not None:
            site = replace(site, asset_root=asset_root)

        logs = self.logs
        if log_dir is not None:
            logs = replace(self.logs, log_dir=log_dir)

        return replace(self, server=server, site=site, logs=logs)
