""" frostlib build script for setuptools.

"""

from setuptools import find_packages, setup  # type: ignore

import frostlib

with open("README.md", "r", encoding="ascii") as file_:
    longdescription = file_.read()

setup(
    name=frostlib.name,
    version=frostlib.__version__,
    license=frostlib.__license__,
    author=frostlib.__author__,
    author_email=frostlib.__author_email__,
    description="A library for FROST threshold Schnorr signatures",
    long_description=longdescription,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"frostlib": ["_data/*.json"]},
    include_package_data=True,
    install_requires=["dataclasses_json"],
    extras_require={"test": ["pytest"]},
    keywords=(
        "frost threshold-signatures schnorr elliptic-curves secp256k1 "
        "shamir-secret-sharing lagrange-interpolation bech32"
    ),
    python_requires=">=3.9",
    classifiers=[
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
        "Topic :: Scientific/Engineering",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
