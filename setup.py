#!/usr/bin/env python3
"""
Setup script for yamlrep.

yamlrep turns Python data into YAML node trees: the representation step
of dumping YAML, with identity-based alias detection and automatic
flow/block style selection.

Install for development with the test extra:

    pip install -e '.[test]'
"""

from setuptools import setup

setup(
    name='yamlrep',
    version='0.1.0',
    description='Represent Python data as YAML node trees',
    packages=['yamlrep'],
    package_data={'yamlrep': ['__init__.pyi']},
    python_requires='>=3.8',
    extras_require={
        'test': ['pytest'],
    },
)
