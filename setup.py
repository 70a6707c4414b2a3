#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Setup configuration for zitadel-client package.
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="zitadel-grpc-client",
    version="0.1.0",
    description="Authenticated gRPC client for all ZITADEL platform services over one connection",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=[
        "grpcio>=1.50.0",
        "protobuf>=4.21.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "protos": [
            "grpcio-tools>=1.50.0",
            "googleapis-common-protos>=1.56.0",
        ],
        "dev": [
            "pytest>=7.0.0",
        ],
    },
    include_package_data=True,
)
