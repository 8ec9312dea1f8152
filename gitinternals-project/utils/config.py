# What it does: Reads the repository's `config` file and the environment to decide which git directory to open and whether its format is readable
# How it does: `core.repositoryformatversion` is read from `<git-dir>/config`. Versions 0 and 1 share the loose object layout, anything newer is refused
# What data structure it uses: Map / Hash Table / Dictionary (the INI file format is a map of sections to key-value pairs, managed by Python's `configparser`)

import configparser
import os
import sys

from .errors import ConfigError
from .repository import find_git_dir

SUPPORTED_FORMAT_VERSIONS = (0, 1)


def get_config_path(git_dir): # Returns the path to the config file within the git directory
    return os.path.join(git_dir, 'config')


def read_config(git_dir): # Reads and returns the configuration as a ConfigParser object
    config = configparser.ConfigParser(strict=False, interpolation=None)
    config_path = get_config_path(git_dir)
    if os.path.exists(config_path):
        try:
            config.read(config_path)
        except configparser.Error as e:
            raise ConfigError(f"Could not parse {config_path}: {e}") from e
    return config


def get_repository_format_version(git_dir):
    config = read_config(git_dir)
    value = config.get('core', 'repositoryformatversion', fallback='0')
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"Invalid core.repositoryformatversion: '{value}'")


def check_repository_format(git_dir):
    version = get_repository_format_version(git_dir)
    if version not in SUPPORTED_FORMAT_VERSIONS:
        raise ConfigError(f"Unsupported repository format version: {version}")
    return version


def resolve_git_dir(git_dir=None): # Picks the git directory: explicit argument, then $GIT_DIR, then discovery from the current directory
    if git_dir:
        return os.path.abspath(git_dir)
    env_dir = os.environ.get('GIT_DIR')
    if env_dir:
        return os.path.abspath(env_dir)
    return find_git_dir()


def require_git_dir(git_dir=None): # Same as resolve_git_dir, but exits when there is no usable git directory
    resolved = resolve_git_dir(git_dir)
    if not resolved or not os.path.isdir(resolved):
        print("fatal: not a git repository (or any of the parent directories): .git", file=sys.stderr)
        sys.exit(1)
    try:
        check_repository_format(resolved)
    except ConfigError as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)
    return resolved
