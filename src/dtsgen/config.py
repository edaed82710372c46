"""Where dtsgen reads its settings from and how it writes files.

* :func:`get_data_dir` -- per-user data directory for crash logs
  (``$XDG_DATA_HOME/dtsgen`` on Linux/BSD, ``~/.dtsgen`` elsewhere).
* :func:`load_project_config` -- optional ``./dtsgen.json`` whose keys are
  :class:`~dtsgen.models.GeneratorConfig` fields.
* :func:`resolve_config` -- CLI flags over environment variables over the
  project file over defaults.
* :func:`atomic_write` -- write-to-temp-then-rename, so an interrupted run
  never leaves a half-written declaration.
"""

from __future__ import annotations

import json
import os
import platform
import stat
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from dtsgen.exceptions import ConfigError
from dtsgen.models import GeneratorConfig

_APP_NAME = "dtsgen"
_PROJECT_CONFIG_FILENAME = "dtsgen.json"

# Environment variable -> GeneratorConfig field
_ENV_OVERRIDES: dict[str, str] = {
    "DTSGEN_SOURCE_DIR": "source_dir",
    "DTSGEN_DESCRIPTOR_SUFFIX": "descriptor_suffix",
    "DTSGEN_DECLARATION_SUFFIX": "declaration_suffix",
}


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def get_data_dir() -> Path:
    """Return the per-user data directory, creating it on first use."""
    if _is_xdg_platform():
        base = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
        data_dir = Path(base) / _APP_NAME
    else:
        data_dir = Path.home() / f".{_APP_NAME}"
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* (UTF-8, ``\\n`` line endings) in one rename.

    The temp file lives next to *path* so ``os.replace`` stays on one
    filesystem. The result keeps the permissions of an existing *path*, or
    gets ``0o666`` minus the umask when *path* is new. If anything fails,
    including ``KeyboardInterrupt``, the temp file is removed and *path* is
    left as it was.
    """
    tmp = tempfile.NamedTemporaryFile(
        mode="w",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
        encoding="utf-8",
        newline="",
    )
    try:
        with tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp.name, _target_mode(path))
        os.replace(tmp.name, path)
    except BaseException:
        try:
            os.unlink(tmp.name)
        except OSError:
            pass
        raise


def _target_mode(path: Path) -> int:
    # NamedTemporaryFile always creates 0600 files
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def load_project_config(directory: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``dtsgen.json``.

    Args:
        directory: Directory to look in. Defaults to the current working
            directory.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = (directory or Path.cwd()) / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def resolve_config(
    cli_source_dir: Optional[str] = None,
    cli_descriptor_suffix: Optional[str] = None,
    cli_declaration_suffix: Optional[str] = None,
    cli_fail_fast: Optional[bool] = None,
) -> GeneratorConfig:
    """Resolve the generator config with full precedence chain.

    Precedence (high to low):
        1. CLI arguments (``cli_*``; ``None`` means "not given")
        2. Environment variables (``DTSGEN_SOURCE_DIR``,
           ``DTSGEN_DESCRIPTOR_SUFFIX``, ``DTSGEN_DECLARATION_SUFFIX``)
        3. Project config (``./dtsgen.json``)
        4. Defaults

    Returns:
        The effective :class:`~dtsgen.models.GeneratorConfig`.

    Raises:
        ConfigError: If the project config is invalid or a resolved value
            fails validation.
    """
    # 3. Project-local config
    values: dict[str, Any] = dict(load_project_config() or {})

    # 2. Environment variables
    for env_var, field_name in _ENV_OVERRIDES.items():
        env_value = os.environ.get(env_var)
        if env_value:
            values[field_name] = env_value

    # 1. CLI flags
    cli_values = {
        "source_dir": cli_source_dir,
        "descriptor_suffix": cli_descriptor_suffix,
        "declaration_suffix": cli_declaration_suffix,
        "fail_fast": cli_fail_fast,
    }
    values.update({k: v for k, v in cli_values.items() if v is not None})

    try:
        config = GeneratorConfig.model_validate(values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc

    if not config.descriptor_suffix or not config.declaration_suffix:
        raise ConfigError("Descriptor and declaration suffixes must not be empty")
    if config.descriptor_suffix == config.declaration_suffix:
        raise ConfigError(
            f"Descriptor and declaration suffixes are both '{config.descriptor_suffix}'; "
            "generated files would overwrite their sources"
        )
    return config
