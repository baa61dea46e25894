#!/usr/bin/env python

import os
import re

from setuptools import setup, find_packages

with open(os.path.join(os.path.dirname(__file__), "qb_field", "version.py")) as version_file:
    VERSION = re.search(r"VERSION = \"(.+)\"", version_file.read()).group(1)


setup(name="qb-field",
      version=VERSION,
      description="Object facade for managing Quickbase fields through the REST API",
      author="Stitch",
      url="http://singer.io",
      classifiers=["Programming Language :: Python :: 3 :: Only"],
      install_requires=[
        "singer-python==6.3.0",
        "requests==2.32.4",
        "backoff==2.2.1",
      ],
      extras_require={
        "test": [
          "pytest",
          "parameterized",
        ]
      },
      packages=find_packages(exclude=["tests", "tests.*"]),
)
