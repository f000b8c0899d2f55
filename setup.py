#!/usr/bin/env python3

from setuptools import setup, find_packages


setup(name='py_minifloat',
      version='0.1.0',
      description='Arbitrary width minifloat encoder/decoder',
      packages=find_packages(exclude=['tests', 'tests.*']),
      install_requires=[
          'pyyaml',
          'numpy',
      ],
      extras_require={
          'test': [
              'pytest',
          ],
      },
      entry_points={
          'console_scripts': [
              'minifloat=py_minifloat.minifloat:main',
          ],
      },
      )
