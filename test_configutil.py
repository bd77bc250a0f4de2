"""
Tests for config parsing and the objload command line
"""

import unittest
import tempfile
from pathlib import Path
import numpy as np
from configutil import ConfigUtil
from objload import main
from test_loader import FLOOR_OBJ, FLOOR_MTL, png_bytes


class TestConfigUtil(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        self.configfile = self.dir / 'config.ini'

    def tearDown(self):
        self.tmp.cleanup()

    def test_defaults(self):
        config = ConfigUtil(self.configfile, [])
        self.assertTrue(self.configfile.exists())
        self.assertIsNone(config.input)
        self.assertEqual(2.0, config.scale)
        self.assertTrue(config.flip_v)
        self.assertFalse(config.export)
        self.assertEqual(Path('.'), config.asset_dir)

    def test_args(self):
        config = ConfigUtil(self.configfile, [
            'tiles/floor.obj', '--scale', '1.5', '--no_flip_v', '-e', '-r', 'assets'])
        self.assertEqual('tiles/floor.obj', config.input)
        self.assertEqual(1.5, config.settings.scale)
        self.assertFalse(config.settings.flip_v)
        self.assertTrue(config.export)
        self.assertEqual(Path('assets'), config.asset_dir)

    def test_configini(self):
        self.configfile.write_text(
            "[default]\nscale = 3\nflip v = no\nasset directory = assets\n")
        config = ConfigUtil(self.configfile, ['floor.obj'])
        self.assertEqual(3.0, config.scale)
        self.assertFalse(config.flip_v)
        self.assertEqual(Path('assets'), config.asset_dir)

    def test_args_override_configini(self):
        self.configfile.write_text("[default]\nscale = 3\n")
        config = ConfigUtil(self.configfile, ['floor.obj', '--scale', '0.5'])
        self.assertEqual(0.5, config.scale)


class TestObjLoad(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        (self.dir / 'tiles').mkdir()
        (self.dir / 'tiles/floor.obj').write_bytes(FLOOR_OBJ)
        (self.dir / 'tiles/floor.mtl').write_bytes(FLOOR_MTL)
        (self.dir / 'tiles/stone.png').write_bytes(png_bytes())

    def tearDown(self):
        self.tmp.cleanup()

    def config(self, *args: str) -> ConfigUtil:
        return ConfigUtil(self.dir / 'config.ini', [*args, '-r', str(self.dir)])

    def test_no_input(self):
        self.assertEqual(2, main(self.config()))

    def test_export(self):
        outputdir = self.dir / 'out'
        returncode = main(self.config('tiles/floor.obj', '-e', '-t', '-o', str(outputdir)))

        self.assertEqual(0, returncode)
        with np.load(outputdir / 'floor.npz') as archive:
            self.assertEqual((4, 3), archive['tile/positions'].shape)
            self.assertEqual((3, 3), archive['trim/positions'].shape)

    def test_single_object(self):
        outputdir = self.dir / 'out'
        main(self.config('tiles/floor.obj#obj:trim', '-e', '-o', str(outputdir)))
        with np.load(outputdir / 'floor.npz') as archive:
            self.assertEqual(['trim/indices', 'trim/normals', 'trim/positions', 'trim/uvs'],
                             sorted(archive.files))

    def test_broken_texture(self):
        (self.dir / 'tiles/stone.png').write_bytes(b'broken')
        self.assertEqual(1, main(self.config('tiles/floor.mtl', '-t')))


if __name__ == '__main__':
    unittest.main()
