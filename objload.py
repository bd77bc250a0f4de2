"""
objload loads Wavefront .obj geometry together with its .mtl material
library the same way the editor does, reports what it found and can
export the deduplicated, triangulated render buffers for inspection.
"""

from typing import Final, Iterable, Optional, Sequence
import sys
import logging
from logutil import setup_logger, shutdown_logger, app_dir
from configutil import ConfigUtil
from wavefront import WavefrontException
from wavefront.assets import AssetPath, DirectorySource
from wavefront.base_classes import Obj, ObjCollection, MtlCollection
from wavefront.export import export_npz
from wavefront.loader import load_path

logger = logging.getLogger(__name__)

RUNNING_AS_EXE: Final[bool] = getattr(sys, 'frozen', False) and hasattr(sys, '_MEIPASS')


def describe(obj: Obj) -> str:
    texture = '-'
    if obj.material and obj.material.diffuse_texture:
        texture = str(obj.material.diffuse_texture.path)
    return (f"{obj.name}: {len(obj.vertices)} vertices, {len(obj.faces)} triangles, "
            f"material '{obj.material_key}', texture {texture}")


def check_textures(asset) -> int:
    """Loads every texture handle, returns the number that failed"""
    failed = 0
    for handle in asset.dependencies():
        try:
            info = handle.get()
        except WavefrontException as e:
            logger.warning(str(e))
            failed += 1
            continue
        logger.info(f"{handle.path}: {info.width}x{info.height} {info.mode}")
    return failed


def main(config: ConfigUtil) -> int:
    if not config.input:
        config.argparser.print_help()
        return 2

    path = AssetPath.parse(config.input)
    source = DirectorySource(config.asset_dir)
    logger.info(f"Loading {path} from {config.asset_dir}")

    asset = load_path(path, source, config.settings)

    objects: Iterable[Obj] = ()
    if isinstance(asset, ObjCollection):
        objects = asset.objects.values()
    elif isinstance(asset, Obj):
        objects = (asset,)
    elif isinstance(asset, MtlCollection):
        for material in asset.materials.values():
            logger.info(f"{material.name}: map_Kd {material.map_kd or '-'}")

    for obj in objects:
        logger.info(describe(obj))

    failed = 0
    if config.check_textures and isinstance(asset, (ObjCollection, MtlCollection)):
        failed = check_textures(asset)

    if config.export and objects:
        outputdir = config.output_dir
        if not outputdir.is_dir():
            outputdir.mkdir(parents=True)
        export_npz(objects, outputdir / f"{path.path.stem}.npz")

    return 1 if failed else 0


def run(argv: Optional[Sequence[str]] = None) -> int:
    config = ConfigUtil(app_dir() / 'config.ini', argv)
    setup_logger(verbose=config.verbose)
    try:
        return main(config)
    except WavefrontException as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.exception(str(e))
        return 1
    finally:
        if RUNNING_AS_EXE:
            input('Press Enter to exit...')
        shutdown_logger()


if __name__ == '__main__':
    sys.exit(run())
