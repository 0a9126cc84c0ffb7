"""Configuration: where repositories are cloned and which hosts are accepted"""

import configparser
import logging
import os
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

from gclone.errors import BaseDirCannotBeOpened, BaseDirNotFound, InvalidConfigFile

logger = logging.getLogger(__name__)

APP_NAME = "gclone"

# checked in order; each names a GOPATH-style workspace
DOWNLOAD_PATH_VARS = ("GC_DOWNLOAD_PATH", "GOPATH")

# repositories live under <workspace>/src, as with GOPATH
SOURCE_DIR = "src"

default_cfg = {"hosts": {"allowed": "github.com"}}


def get_config_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if environ is None else environ
    if platform.system() == "Darwin":
        # macOS
        return Path(f"~/Library/Application Support/{APP_NAME}").expanduser()
    xdg_config_home = env.get("XDG_CONFIG_HOME") or os.path.join(
        os.path.expanduser("~"), ".config"
    )
    return Path(xdg_config_home) / APP_NAME


def get_config_file(environ: Optional[Mapping[str, str]] = None) -> Path:
    return get_config_dir(environ) / f"{APP_NAME}.cfg"


class ConfigAccessor:
    """
    A dict-like accessor for the gclone configuration file.

    Missing files, sections and keys all fall back to defaults, so the tool
    works without any configuration file.

    Usage:
        config = ConfigAccessor()
        value = config.get('dirs', 'download_path', default=None)

    Example file:
        [dirs]
        download_path = ~/code

        [hosts]
        allowed = github.com, gitlab.com
        default = github.com
    """

    def __init__(self, config_path: Optional[Path] = None):
        if config_path is None:
            self.config_path = get_config_file()
        else:
            self.config_path = config_path

        self.config = configparser.ConfigParser()
        if self.config_path.exists():
            logger.debug(f"Reading configuration from {self.config_path}")
            try:
                self.config.read(self.config_path)
            except configparser.Error as e:
                raise InvalidConfigFile(self.config_path, e) from e

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """
        Get a configuration value from the specified section and key.

        Args:
            section: The configuration section
            key: The configuration key
            default: Value to return if the section or key doesn't exist

        Returns:
            The configuration value if it exists, otherwise the default value
        """
        try:
            return self.config[section][key]
        except (KeyError, configparser.NoSectionError, configparser.NoOptionError):
            return default
        except configparser.InterpolationError as e:
            raise InvalidConfigFile(self.config_path, e) from e

    def get_list(self, section: str, key: str, default: str = "") -> Tuple[str, ...]:
        """Comma-separated value as a tuple, blanks dropped."""
        raw = self.get(section, key, default) or ""
        return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    """Values gathered once at process start and passed down explicitly."""

    base_dir: Path
    allowed_hosts: Tuple[str, ...]
    default_host: str


def get_download_path(
    environ: Optional[Mapping[str, str]] = None,
    config: Optional[ConfigAccessor] = None,
) -> Path:
    """
    Find the download workspace: $GC_DOWNLOAD_PATH, then $GOPATH, then the
    `download_path` key of the `[dirs]` config section.

    Raises:
        BaseDirNotFound: none of them is set
    """
    env = os.environ if environ is None else environ
    for var in DOWNLOAD_PATH_VARS:
        value = env.get(var)
        if value:
            logger.debug(f"Using download path from ${var}: {value}")
            return Path(value).expanduser()

    if config is not None:
        value = config.get("dirs", "download_path")
        if value:
            logger.debug(f"Using download path from {config.config_path}: {value}")
            return Path(value).expanduser()

    raise BaseDirNotFound(DOWNLOAD_PATH_VARS)


def get_base_dir(
    environ: Optional[Mapping[str, str]] = None,
    config: Optional[ConfigAccessor] = None,
) -> Path:
    """Directory the {host}/{org}/{project} tree is created in."""
    return get_download_path(environ, config) / SOURCE_DIR


def check_base_dir(base_dir: Path) -> Path:
    """
    Make sure the base directory exists and can be listed. It is never created.

    Raises:
        BaseDirCannotBeOpened: the directory is missing or unreadable
    """
    try:
        with os.scandir(base_dir) as entries:
            next(entries, None)
    except OSError as e:
        raise BaseDirCannotBeOpened(base_dir, e) from e
    return base_dir


def get_hosts(config: Optional[ConfigAccessor] = None) -> Tuple[Tuple[str, ...], str]:
    """
    Allowed hosts for HTTP and shorthand references, and the shorthand host.

    The default host is always part of the allowed hosts.
    """
    fallback = default_cfg["hosts"]["allowed"]
    if config is None:
        allowed = tuple(h.strip() for h in fallback.split(","))
        return allowed, allowed[0]

    allowed = config.get_list("hosts", "allowed", fallback) or (fallback,)
    allowed = tuple(h.lower() for h in allowed)
    default_host = (config.get("hosts", "default") or allowed[0]).strip().lower()
    if default_host not in allowed:
        allowed = (default_host,) + allowed
    return allowed, default_host


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    config: Optional[ConfigAccessor] = None,
) -> Settings:
    """
    Gather base directory and host settings, validating the base directory.

    Raises:
        ConfigurationError: the base directory is not configured or cannot be opened
    """
    if config is None:
        config = ConfigAccessor()

    base_dir = check_base_dir(get_base_dir(environ, config).resolve())
    allowed_hosts, default_host = get_hosts(config)
    return Settings(
        base_dir=base_dir, allowed_hosts=allowed_hosts, default_host=default_host
    )
