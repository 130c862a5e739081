"""Output filenames for exports."""

from pathlib import PurePosixPath

from fusion_export.models.options import DownloadFormat, DownloadOptions
from fusion_export.models.project import slugify

METADATA_FILENAME = "_flashfusion-metadata.json"

# Formats that ship METADATA_FILENAME next to the application files
METADATA_FORMATS = frozenset({DownloadFormat.ZIP, DownloadFormat.TAR, DownloadFormat.INDIVIDUAL})

_SUFFIXES: dict[DownloadFormat, str] = {
    DownloadFormat.ZIP: "-zip.zip",
    DownloadFormat.TAR: "-tar.tar.gz",
    DownloadFormat.JSON: "-export.json",
    DownloadFormat.YAML: "-export.yaml",
    DownloadFormat.DOCKER: "-docker-package.zip",
    DownloadFormat.GITHUB_TEMPLATE: "-github-template.zip",
    DownloadFormat.VSCODE_WORKSPACE: "-vscode-workspace.zip",
    DownloadFormat.NPM_PACKAGE: "-npm-package.zip",
    DownloadFormat.CODE_ONLY: "-code-only.zip",
    DownloadFormat.CONFIG_ONLY: "-config-only.zip",
}


def output_filename(app_name: str, options: DownloadOptions) -> str:
    """Filename for a single-artifact export.

    A custom name is used verbatim; otherwise the slugified app name plus a
    per-format suffix.
    """
    if options.custom_name:
        return options.custom_name
    suffix = _SUFFIXES.get(options.format)
    if suffix is None:
        raise ValueError(f"{options.format.value} exports have no single output file")
    return f"{slugify(app_name)}{suffix}"


def flatten_path(path: str) -> str:
    """Flatten a nested path for delivery into a flat destination."""
    return path.replace("/", "_")


def unique_filename(filename: str, used: set[str]) -> str:
    """Return ``filename``, or ``<stem>-N<suffix>`` if it is already in ``used``.

    The chosen name is added to ``used``. ``a_b.txt`` becomes ``a_b-2.txt``,
    then ``a_b-3.txt``.
    """
    candidate = filename
    pure = PurePosixPath(filename)
    counter = 2
    while candidate in used:
        candidate = f"{pure.stem}-{counter}{pure.suffix}"
        counter += 1
    used.add(candidate)
    return candidate
