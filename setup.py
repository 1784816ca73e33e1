# Copyright © 2025 LeadCapture

import re
import os
import codecs
from os import path
from io import open
from setuptools import setup, find_packages


here = path.abspath(path.dirname(__file__))

with open(path.join(here, "README.md"), encoding="utf-8") as f:
    long_description = f.read()

with codecs.open(os.path.join(here, "leadcapture/__init__.py"), encoding="utf-8") as init_file:
    version_match = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]", init_file.read(), re.M)
    if not version_match:
        raise RuntimeError("Unable to find version string in leadcapture/__init__.py")
    version_string = version_match.group(1)


requirements = [
    # Supabase (Edge Functions + leads table)
    "supabase>=2.0.0",
    "postgrest>=0.13.0",

    # Environment and configuration
    "python-dotenv>=1.0.0",

    # Data models
    "pydantic>=2.0.0",

    # Command line
    "click>=8.1.0",
]

test_requirements = [
    "pytest>=8.0.0",
    "pytest-asyncio>=0.21.0",
]

setup(
    name="leadcapture",
    version=version_string,
    description="Lead-capture form core with duplicate-submission guard, confirmation email and Supabase storage",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="LeadCapture",
    license="MIT",
    packages=find_packages(include=["leadcapture", "leadcapture.*"]),
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={"test": test_requirements},
    entry_points={
        "console_scripts": [
            "leadcapture=leadcapture.cli:main",
        ]
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Topic :: Internet :: WWW/HTTP",
    ],
)
