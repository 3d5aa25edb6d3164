#!/usr/bin/env python
from setuptools import setup, find_packages

setup(
    name="cbinom",
    version="0.1.0",
    description="Density, distribution, quantile, sampling and moment fitting for the continuous binomial distribution",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",

    # finds cbinom/ and its subpackages, excluding tests, docs, notebooks, etc.
    packages=find_packages(exclude=["tests*", "docs*", "notebooks*", "examples*"]),

    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24",
        "scipy>=1.11",
    ],
    extras_require={
        "dev": [
            "pytest",
            "black",
            "flake8",
        ],
    },

    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],

    include_package_data=False,
)
