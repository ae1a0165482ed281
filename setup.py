"""Setup script for arvak_pauli Python package."""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="arvak-pauli",
    version="0.1.0",
    author="HIQ Lab",
    author_email="info@hiq-lab.org",
    description="Compile Pauli-exponential ansatz descriptions into OpenQASM 2.0/3.0",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/hiq-lab/arvak",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering :: Physics",
    ],
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.21.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "arvak-pauli=arvak_pauli.cli:main",
        ],
    },
)
