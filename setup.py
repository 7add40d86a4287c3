#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""setup for cmacore package distribution.

To prepare a distribution from a clean code folder::

    python setup.py check
    python setup.py sdist bdist_wheel > dist_call_output.txt ; less dist_call_output.txt

Check distribution and project description:

    tree build  # check that the build folders are clean
    twine check dist/*

Finally upload the distribution::

    twine upload dist/*1.0.0*  # to not upload outdated stuff

"""
from setuptools import setup
from cmacore import __version__  # assumes that the right module is visible first in path, i.e., cmacore folder is in current folder
from cmacore import __doc__ as long_description

try:
    with open('README.txt') as file:
        long_description = file.read()
except IOError:  # file not found
    pass

setup(name="cmacore",
      long_description=long_description,
      long_description_content_type = 'text/x-rst',
      version=__version__.split()[0],
      description="CMA-ES engine, Covariance Matrix Adaptation " +
                  "Evolution Strategy in ask-and-tell style with " +
                  "exchangeable linear algebra backend",
      author="cmacore authors",
      license="BSD",
      classifiers = [
          "Intended Audience :: Science/Research",
          "Intended Audience :: Education",
          "Topic :: Scientific/Engineering",
          "Topic :: Scientific/Engineering :: Mathematics",
          "Topic :: Scientific/Engineering :: Artificial Intelligence",
          "Operating System :: OS Independent",
          "Programming Language :: Python :: 3",
          "Development Status :: 4 - Beta",
          "License :: OSI Approved :: BSD License",
      ],
      keywords=["optimization", "CMA-ES", "cmaes"],
      packages=["cmacore", "cmacore.utilities"],
      python_requires=">=3.6",
      install_requires=["numpy"],
      extras_require={
            "test": ["pytest"],
      },
      )
