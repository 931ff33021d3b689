from __future__ import annotations

import os
import re

from setuptools import find_packages
from setuptools import setup

HERE = os.path.abspath(os.path.dirname(__file__))

with open(
    os.path.join(HERE, "lib", "serialized_attributes", "__init__.py")
) as v_file:
    VERSION = (
        re.compile(r""".*__version__ = ["'](.*?)['"]""", re.S)
        .match(v_file.read())
        .group(1)
    )

with open(os.path.join(HERE, "README.rst")) as r_file:
    readme = r_file.read()

setup(
    name="sqlalchemy-serialized",
    version=VERSION,
    description="Typed, change-tracked attributes stored in a single "
    "serialized column",
    long_description=readme,
    long_description_content_type="text/x-rst",
    license="MIT",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Topic :: Database :: Front-Ends",
    ],
    package_dir={"": "lib"},
    packages=find_packages("lib"),
    python_requires=">=3.9",
    install_requires=["SQLAlchemy>=2.0"],
    extras_require={
        "test": ["pytest>=7.0"],
        "lint": ["flake8"],
    },
)
