#!/usr/bin/env python3
"""
Setup configuration for bandcamp-extractor
Extracts structured metadata from Bandcamp track pages
"""

from setuptools import setup, find_packages

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Core requirements (always installed)
core_requirements = [
    "requests>=2.31.0",
    "beautifulsoup4>=4.12.0",
    "python-dateutil>=2.8.2",
    "click>=8.2.0",
    "rich-click>=1.8.0",
    "pyyaml>=6.0.1",
    "tqdm>=4.66.1",
]

setup(
    name="bandcamp-extractor",
    version="0.1.0",
    author="bandcamp-extractor",
    description="Extract title, artist, license, tags and stream URL from Bandcamp track pages",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
    ],
    python_requires=">=3.10",
    install_requires=core_requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.3",
            "black>=23.11.0",
            "flake8>=6.1.0",
            "mypy>=1.7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "bcx=bandcamp_extractor.cli:main",
        ],
    },
    keywords="bandcamp metadata scraper music track",
)
