#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
from setuptools import setup, find_packages

setup(
    name="nnop",
    version="0.1.0",
    description="Operator definitions, shape inference and kernel code generation",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "strictyaml",
        "typing_extensions",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "nnop-codegen=nnop.cli.codegen:main",
        ],
    },
)
