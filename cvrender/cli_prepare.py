"""
CLI Phase 2: Prepare execution environment.

Validates inputs and resolves output paths.
No actual execution - just setup.
"""

from __future__ import annotations

from dataclasses import replace

from .cli_config import UserConfig
from .logging_utils import LOG
from .renderers import get_renderer
from .transforms import get_transform


def prepare_execution_environment(config: UserConfig) -> UserConfig:
    """
    Phase 2: Validate inputs and prepare execution environment.

    - Validates the data file exists
    - Validates the renderer and transform names
    - Resolves the default output path and creates its directory

    Returns the (possibly updated) config.
    """
    if config.data is not None and not config.data.is_file():
        LOG.error("Data file not found: %s", config.data)
        raise FileNotFoundError(f"Data file not found: {config.data}")

    if config.render:
        renderer = get_renderer(config.render.format)
        if renderer is None:
            raise ValueError(f"Unknown renderer: {config.render.format!r} (see --list renderers)")

        output = config.render.output
        if output is None:
            stem = config.data.stem
            if config.render.mode == "cover":
                stem = f"{stem}-cover-letter"
            output = config.data.with_name(stem + renderer.suffix)
        output.parent.mkdir(parents=True, exist_ok=True)
        config = replace(config, render=replace(config.render, output=output))

    if config.transform:
        if get_transform(config.transform.operation) is None:
            raise ValueError(f"Unknown transform: {config.transform.operation!r} (see --list transforms)")
        if config.transform.output is not None:
            config.transform.output.parent.mkdir(parents=True, exist_ok=True)

    return config
