#!/usr/bin/env python
from setuptools import (
    find_packages,
    setup,
)

description = "didlink: verified resolution of DID URLs to content-addressed targets"

extras_require = {
    "dev": [
        "build>=0.9.0",
        "bump_my_version>=0.19.0",
        "ipython",
        "mypy==1.10.0",
        "pre-commit>=3.4.0",
        "tox>=4.0.0",
        "twine",
        "wheel",
    ],
    "test": [
        "pytest>=7.0.0",
        "pytest-xdist>=2.4.0",
        "pytest-trio>=0.5.2",
        "factory-boy>=2.12.0",
    ],
}

extras_require["dev"] = extras_require["dev"] + extras_require["test"]

try:
    with open("./README.md", encoding="utf-8") as readme:
        long_description = readme.read()
except FileNotFoundError:
    long_description = description

install_requires = [
    "base58>=1.0.3",
    "coincurve>=10.0.0",
    "pycryptodome>=3.9.2",
    "pymultihash>=0.8.2",
    "pynacl>=1.3.0",
    "trio>=0.26.0",
]

setup(
    name="didlink",
    # *IMPORTANT*: Don't manually change the version here. See Contributing docs for the release process.
    version="0.1.0",
    description=description,
    long_description=long_description,
    long_description_content_type="text/markdown",
    include_package_data=True,
    install_requires=install_requires,
    python_requires=">=3.10, <4",
    extras_require=extras_require,
    license="MIT AND Apache-2.0",
    zip_safe=False,
    keywords="did decentralized-identifier ipfs cid resolver",
    packages=find_packages(exclude=["scripts", "scripts.*", "tests", "tests.*"]),
    package_data={"didlink": ["py.typed"]},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Natural Language :: English",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    platforms=["unix", "linux", "osx", "win32"],
)
