import sys

from setuptools import setup, find_namespace_packages

APP = ['main.py']
DATA_FILES = []
OPTIONS = {'argv_emulation': True}

extra = {}
if 'py2app' in sys.argv:
    extra = dict(
        app=APP,
        data_files=DATA_FILES,
        options={'py2app': OPTIONS},
        setup_requires=['py2app'],
    )

setup(
    name='hunt-split',
    version='0.1.0',
    packages=find_namespace_packages(include=['huntsplit', 'huntsplit.*']),
    py_modules=['main'],
    python_requires='>=3.8',
    install_requires=[
        'customtkinter',
        'pandas',
        'matplotlib',
        'mplcursors',
    ],
    extras_require={'test': ['pytest']},
    entry_points={'gui_scripts': ['hunt-split = main:main']},
    **extra,
)
