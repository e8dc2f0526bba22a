"""
Setup script for pdfopsx.

This script configures the package for installation via pip.
Supports both development and production installations.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

setup(
    name="pdfopsx",
    version="1.0.0",
    description="In-memory PDF operations: extract, split, merge, tag discovery, stamping, protection and forms",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="pdfopsx Contributors",
    author_email="",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pypdf[crypto]>=5.0.0",
        "reportlab>=4.0.0",
        "pikepdf>=8.0.0",
        "Pillow>=10.0.0",
        "click>=8.0.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pdfopsx=pdfopsx.cli:cli",
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Office/Business",
        "Topic :: Utilities",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "Environment :: Console",
    ],
    keywords="pdf split merge stamp watermark encrypt form merge-tags",
    license="MIT",
    include_package_data=True,
    zip_safe=False,
)
