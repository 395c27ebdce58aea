# setup.py
from setuptools import setup, find_packages

setup(
    name="ring_scout",
    version="0.1.0",
    description="RingScout: policy-driven webring crawler",
    packages=find_packages(include=["ring_scout", "ring_scout.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "soupsieve>=2.5",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "click>=8.1",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "ring-scout=ring_scout.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
