from setuptools import setup, find_packages

# Read version from __version__.py without importing the package
version_file = {}
with open("autoflutter/__version__.py") as fp:
    exec(fp.read(), version_file)
__version__ = version_file['__version__']

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

python_requires = ">=3.10"

install_requires = [
    "requests",             # Homebrew install script, Android cmdline-tools archive
    "tqdm",                 # Download progress
    "packaging",            # Ruby version floor, SDK package ordering
    "pydantic>=2.0,<3.0",   # Settings model
    "PyYAML>=6.0",          # Settings file
]

extras_require = {
    "test": [
        "pytest",
    ],
}

# Classifiers for supported Python versions
classifiers = [
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: MacOS",
    "Environment :: Console",
]

setup(
    name="autoflutter",
    version=__version__,
    description="Flutter + Android + iOS toolchain provisioning for macOS",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    packages=find_packages(include=["autoflutter", "autoflutter.*"]),
    classifiers=classifiers,
    python_requires=python_requires,
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "autoflutter=autoflutter.main:main",
        ],
    },
    zip_safe=False,
)
