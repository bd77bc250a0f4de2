"""
Writes render buffers of loaded objects to numpy archives
"""

from typing import Dict, Iterable
from pathlib import Path
import logging
import numpy as np
from wavefront.base_classes import Obj


logger = logging.getLogger(__name__)


def render_buffers(objects: Iterable[Obj]) -> Dict[str, np.ndarray]:
    """Flattens the buffers of every object into '<object>/<buffer>' arrays"""
    buffers: Dict[str, np.ndarray] = {}
    for obj in objects:
        for key, array in obj.to_arrays().items():
            buffers[f"{obj.name}/{key}"] = array
    return buffers


def export_npz(objects: Iterable[Obj], outputfile: Path) -> Path:
    buffers = render_buffers(objects)
    if outputfile.suffix != '.npz':
        outputfile = outputfile.with_suffix('.npz')

    with outputfile.open('wb') as file:
        np.savez(file, **buffers)

    logger.info(f"Wrote {len(buffers)} buffers to {outputfile}")
    return outputfile
