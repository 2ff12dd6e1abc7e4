"""
Setup script for Image Base64 Exporter.
"""

from setuptools import setup
import os

# Read the contents of README.md
this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

# Read version from the main module
with open(os.path.join(this_directory, 'image_base64_exporter.py'), encoding='utf-8') as f:
    for line in f:
        if line.startswith('__version__'):
            version = line.split('=')[1].strip().strip('"\'')
            break

setup(
    name="image-base64-exporter",
    version=version,
    description="Converts images to base64 data URIs and exports them as a JSON document",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="",
    author_email="",
    url="",
    # Top-level modules, no package directory
    py_modules=["base64_encoder", "cli_parser", "clipboard", "encoder", "exporter",
                "file_reader", "image_base64_exporter", "image_processor",
                "logger_setup", "models", "selection", "session", "utils"],
    entry_points={
        "console_scripts": [
            "image-base64-exporter=image_base64_exporter:main",
        ],
    },
    install_requires=[
        "pillow>=8.0.0",
        "requests>=2.25.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Graphics :: Graphics Conversion",
        "Topic :: Utilities",
    ],
    python_requires=">=3.9",
)
