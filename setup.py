from setuptools import setup, find_packages

import os

install_requires = [
    "colorama",
    "pyyaml",
    "tqdm",
    "tomlkit>=0.11",
    "typeguard>=4",
]

extras_require = {"test": ["pytest"]}

# Get mosaic version from the VERSION file.
version_file = os.path.join(os.path.dirname(__file__), "VERSION")
with open(version_file) as f:
    mosaic_version = f.read().strip()

with open(os.path.join(os.path.dirname(__file__), "README.md")) as f:
    long_description = f.read()

setup(
    name="mosaic-array",
    version=mosaic_version,
    license="MIT",
    description="Ordered array wrapper with lookup, filtering and reordering helpers",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Libraries",
    ],
    python_requires=">=3.9",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={"mosaic": ["py.typed"]},
    install_requires=install_requires,
    extras_require=extras_require,
)
