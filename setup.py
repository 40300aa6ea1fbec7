#!/usr/bin/env python3
"""
Setup configuration for flom
Convert music streaming links between platforms and shorten URLs
"""

from setuptools import setup, find_packages

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Core requirements (always installed)
core_requirements = [
    "requests>=2.31.0",
    "click>=8.2.0",
    "rich-click>=1.8.0",
    "colorama>=0.4.6",
    "python-dotenv>=1.0.0",
]

setup(
    name="flom",
    version="0.1.0",
    author="flom Team",
    description="Convert music streaming links between platforms and shorten URLs",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Internet :: WWW/HTTP",
    ],
    python_requires=">=3.11",
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
            "flom=flom.cli:main",
        ],
    },
    keywords="spotify apple-music youtube-music odesli songlink music links cli shortener",
)
