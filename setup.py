#!/usr/bin/env python3
"""Setup script for edfview."""

from setuptools import find_packages, setup

setup(
    name="edfview",
    version="0.1.0",
    description="EDF/BDF waveform reader with windowed reads and min/max downsampling",
    packages=find_packages(include=["edfview", "edfview.*"]),
    python_requires=">=3.11",
    install_requires=[
        "numpy>=1.26",
        "loguru>=0.7",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "fastapi>=0.110",
        "uvicorn>=0.27",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "httpx>=0.26",
            "pyedflib>=0.1.36",
        ],
    },
    entry_points={
        "console_scripts": ["edfview=edfview.main:main"],
    },
)
