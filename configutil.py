"""
Utility class for arguments and config file parsing.
"""

from typing import Optional, List, Self, Sequence
import argparse
import configparser
import dataclasses
from pathlib import Path
from wavefront.loader import ObjSettings
from wavefront.obj_reader import DEFAULT_SCALE


VERSION = '0.3.0'


@dataclasses.dataclass
class Args:
    """To help with typing"""
    input:          Optional[str] = None
    output:         Optional[str] = None
    asset_dir:      Optional[str] = None
    scale:          Optional[float] = None
    no_flip_v:      bool = False
    export:         bool = False
    check_textures: bool = False
    verbose:        bool = False

    @classmethod
    def from_dict(cls, d: dict) -> Self:
        fields: List[str] = [f.name for f in dataclasses.fields(cls)]
        new_d = {}
        for key, value in d.items():
            if key in fields:
                new_d[key] = value
        return cls(**new_d)


class ConfigUtil:
    def __init__(self, filepath: Path, argv: Optional[Sequence[str]] = None) -> None:
        self.filepath = filepath

        self._input:          Optional[str] = None
        self._output:         Path = Path('.')
        self._asset_dir:      Path = Path('.')
        self._scale:          float = DEFAULT_SCALE
        self._flip_v:         bool = True
        self._export:         bool = False
        self._check_textures: bool = False
        self._verbose:        bool = False

        self.load_configini()
        self.argparser = argparse.ArgumentParser(
            prog='objload',
            description='Loads a Wavefront .obj (or .mtl) asset, validates it '\
                'and optionally exports its render buffers.',
            exit_on_error=False
        )
        self.load_args(argv)
        self.read_configs()

    def app_exit(self, status: int = 0, message: str = '') -> None:
        self.argparser.exit(status, message)

    def load_configini(self) -> None:
        self.configini = configparser.ConfigParser(default_section='default')
        if self.filepath.exists():
            self.configini.read(self.filepath)
        else:
            self.create_default_config()
            with self.filepath.open('w') as configfile:
                self.configini.write(configfile)

    def load_args(self, argv: Optional[Sequence[str]]) -> None:
        self.argparser.add_argument(
            'input', nargs='?', type=str,
            help='asset path of the .obj/.mtl file, relative to the asset directory '\
                '(append #obj:<name> to select a single object)')
        self.argparser.add_argument(
            '--version', action='version', version=f"%(prog)s {VERSION}",
            help='display current version')
        self.argparser.add_argument(
            '-v', '--verbose', action='store_true',
            help='log debug messages')

        general = self.argparser.add_argument_group('general arguments')
        general.add_argument(
            '-o', '--output', type=str, metavar='',
            help='specify an output directory for exported buffers')
        general.add_argument(
            '-r', '--asset_dir', type=str, metavar='',
            help='root directory asset paths are resolved against')

        load = self.argparser.add_argument_group('load options')
        load.add_argument(
            '--scale', type=float, metavar=str(DEFAULT_SCALE),
            help='scale vertex positions by this amount')
        load.add_argument(
            '--no_flip_v', action='store_true',
            help='keep texture v coordinates as they are in the file')

        misc = self.argparser.add_argument_group('misc options')
        misc.add_argument(
            '-e', '--export', action='store_true',
            help='write render buffers to <output>/<name>.npz')
        misc.add_argument(
            '-t', '--check_textures', action='store_true',
            help='load every texture referenced by the materials')

        self.args = Args.from_dict(vars(self.argparser.parse_args(argv)))

    def read_configs(self) -> None:
        """Make sure we read configs and args in the correct order.
        CLI args should be prioritised over config.ini settings."""

        configini = self.configini['default']

        self._input = self.args.input

        if self.args.output:
            self._output = Path(self.args.output)
        else:
            self._output = Path(configini.get('output directory', '.'))

        if self.args.asset_dir:
            self._asset_dir = Path(self.args.asset_dir)
        else:
            self._asset_dir = Path(configini.get('asset directory', '.'))

        if self.args.scale is not None:
            self._scale = self.args.scale
        else:
            self._scale = configini.getfloat('scale', DEFAULT_SCALE)

        self._flip_v = not self.args.no_flip_v and configini.getboolean('flip v', True)
        self._export = self.args.export or configini.getboolean('export', False)
        self._check_textures = (self.args.check_textures
                                or configini.getboolean('check textures', False))
        self._verbose = self.args.verbose or configini.getboolean('debug', False)

    @property
    def input(self) -> Optional[str]: return self._input
    @property
    def output_dir(self) -> Path: return self._output
    @property
    def asset_dir(self) -> Path: return self._asset_dir
    @property
    def scale(self) -> float: return self._scale
    @property
    def flip_v(self) -> bool: return self._flip_v
    @property
    def export(self) -> bool: return self._export
    @property
    def check_textures(self) -> bool: return self._check_textures
    @property
    def verbose(self) -> bool: return self._verbose

    @property
    def settings(self) -> ObjSettings:
        return ObjSettings(scale=self.scale, flip_v=self.flip_v)

    def create_default_config(self):
        self.configini['default'] = {
            'asset directory': '.',
            'output directory': '.',
            'scale': DEFAULT_SCALE,
            'flip v': 'yes',
            'export': 'no',
            'check textures': 'no',
            'debug': 'no',
        }
