"""
Programmatically call PyInstaller to build the objload executable
"""

import PyInstaller.__main__

PyInstaller.__main__.run([
    'objload.py',
    '--onefile',
    '-c',
    '-n', 'objload',
    '--collect-submodules', 'wavefront',
])
