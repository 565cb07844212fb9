#  ___________________________________________________________________________
#
#  GRIDX-SCUC: Security-Constrained Unit Commitment formulations
#  Copyright 2019 National Technology & Engineering Solutions of Sandia, LLC
#  (NTESS). Under the terms of Contract DE-NA0003525 with NTESS, the U.S.
#  Government retains certain rights in this software.
#  This software is distributed under the Revised BSD License.
#  ___________________________________________________________________________

from setuptools import setup, find_packages
from pathlib import Path

DISTNAME = 'gridx-scuc'
VERSION = '0.1.0.dev0'
PACKAGES = find_packages(include=['scuc', 'scuc.*'])
EXTENSIONS = []
DESCRIPTION = 'GRIDX-SCUC: Security-Constrained Unit Commitment formulations.'
AUTHOR = 'GRIDX-SCUC developers'
LICENSE = 'Revised BSD'

setuptools_kwargs = {
    'zip_safe': False,
    'scripts': [],
    'include_package_data': True,
    'install_requires': ['pyomo>=6.4', 'numpy', 'scipy', 'networkx'],
    'extras_require': {'tests': ['pytest', 'highspy']},
    'python_requires' : '>=3.8, <4',
}

this_directory = Path(__file__).parent
long_description = (this_directory / 'README.md').read_text()

setup(name=DISTNAME,
      version=VERSION,
      packages=PACKAGES,
      ext_modules=EXTENSIONS,
      description=DESCRIPTION,
      author=AUTHOR,
      license=LICENSE,
      long_description=long_description,
      long_description_content_type='text/markdown',
      **setuptools_kwargs)
