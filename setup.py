#!/usr/bin/env python3
"""
Setup script for the portfolio-gallery package.
"""

from setuptools import setup, find_packages

setup(
    name="portfolio-gallery",
    version="0.1.0",
    description="Fetch portfolio projects and cover images into SQLite and serve them over a small HTTP API",
    author="Your Name",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "requests>=2.31.0",
        "tqdm>=4.66",
        "PyYAML>=6.0.2",
        "python-dotenv>=1.0",
        "pydantic>=2.5",
        "fastapi>=0.110",
        "uvicorn>=0.27",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
    entry_points={
        "console_scripts": [
            "gallery=ingestion.cli:main",
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
