#!/usr/bin/env python3
"""
Setup script for softkeys
"""

from setuptools import setup, find_packages
import os
import sys

# Import the version without importing the package
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
from softkeys.__version__ import __version__

# README for long_description
def read_file(filename):
    with open(os.path.join(os.path.dirname(__file__), filename), encoding='utf-8') as f:
        return f.read()

setup(
    name='softkeys',
    version=__version__,
    description='On-screen keyboard for touch-only devices',
    long_description=read_file('README.md'),
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests', 'tests.*', 'docs']),
    python_requires='>=3.8',
    install_requires=[
        'evdev',         # System-wide typing through /dev/uinput
    ],
    extras_require={
        'gui': ['PyQt5'],  # Keyboard surface and demo window
        'dev': [
            'pytest>=7.0',
            'pytest-cov',
            'pytest-timeout',
        ],
    },
    entry_points={
        'console_scripts': [
            'softkeys=softkeys.cli:main',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: End Users/Desktop',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3.13',
        'Operating System :: POSIX :: Linux',
        'Topic :: Desktop Environment',
    ],
)
