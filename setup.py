#!/usr/bin/env python
"""
Copyright 2025 Hathor Labs

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

   http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import re
from pathlib import Path

from setuptools import find_packages, setup

# XXX: importing the package would require its dependencies to be installed before setup runs
__version__ = re.search(
    r"^__version__ = '([^']+)'$",
    (Path(__file__).parent / 'eetf_codec' / '__init__.py').read_text(),
    re.MULTILINE,
).group(1)  # type: ignore[union-attr]

setup(
    name='eetf-codec',
    version=__version__,
    description='Codec between Python values and the Erlang External Term Format',
    author='Hathor Team',
    author_email='contact@hathor.network',
    url='https://hathor.network/',
    license='Apache-2.0',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'License :: OSI Approved :: Apache Software License',
    ],
    packages=find_packages(exclude=('eetf_codec_tests', 'eetf_codec_tests.*')),
    python_requires='>=3.11',
    install_requires=[
        'pydantic>=2',
        'structlog',
        'typing_extensions',
    ],
    extras_require={
        'test': ['pytest'],
    },
)
