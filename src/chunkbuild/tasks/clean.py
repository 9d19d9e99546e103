import logging
import shutil
from pathlib import Path

from chunkbuild.context import BuildContext
from chunkbuild.exceptions import ConfigurationError

__all__ = ["clean_build_dir"]

logger = logging.getLogger(__name__)


def _is_protected(build_dir: Path, project_root: Path) -> bool:
    if str(build_dir) in (".", "/", ""):
        return True
    target = (project_root / build_dir).resolve()
    return target == project_root.resolve() or target == Path(target.anchor)


def clean_build_dir(ctx: BuildContext) -> bool:
    """
    Delete the build directory.

    Returns:
        True if the directory existed and was removed.

    Raises:
        ConfigurationError: If the build directory is the project root or the
            filesystem root. Nothing is deleted in that case.
    """
    build_dir = ctx.settings.build_dir
    if _is_protected(build_dir, ctx.project_root):
        raise ConfigurationError(f"Refusing to rm -rf {build_dir}")

    target = ctx.path(build_dir)
    if not target.exists():
        logger.debug("Nothing to clean at %s", target)
        return False
    logger.info("Removing %s", target)
    shutil.rmtree(target)
    return True
