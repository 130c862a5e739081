"""Path classification for the code-only and config-only formats."""

from pathlib import PurePosixPath

CODE_EXTENSIONS = (".js", ".ts", ".tsx", ".jsx", ".py", ".java", ".css", ".scss", ".html")
CONFIG_NAMES = ("package.json", "tsconfig.json", ".env", "docker-compose.yml", "Dockerfile")
CONFIG_EXTENSIONS = (".config.js", ".config.ts", ".json", ".yml", ".yaml")


def is_code_file(path: str) -> bool:
    return path.endswith(CODE_EXTENSIONS)


def is_config_file(path: str) -> bool:
    name = PurePosixPath(path).name
    return any(marker in name for marker in CONFIG_NAMES) or path.endswith(CONFIG_EXTENSIONS)


def keep_for_code_only(path: str) -> bool:
    """Source files that are not also configuration (vite.config.ts is config)."""
    return is_code_file(path) and not is_config_file(path)


def keep_for_config_only(path: str) -> bool:
    return is_config_file(path)
