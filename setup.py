# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Setup configuration for servicebus-autoconfig package."""

from pathlib import Path

from setuptools import find_packages, setup

# Read the README file if it exists
this_directory = Path(__file__).parent
readme_path = this_directory / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")
else:
    long_description = "Azure Service Bus client auto-configuration with anonymized usage telemetry"

setup(
    name="servicebus-autoconfig",
    version="0.1.0",
    author="Copilot-for-Consensus Contributors",
    description="Azure Service Bus client auto-configuration with anonymized usage telemetry",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "azure-servicebus>=7.11.0",  # Azure Service Bus client
        "azure-monitor-opentelemetry-exporter>=1.0.0b21",  # Azure Monitor exporter for OpenTelemetry
        "opentelemetry-sdk>=1.20.0",  # OpenTelemetry SDK for telemetry counters
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "hypothesis>=6.84.0",
            "pylint>=3.0.0",
            "mypy>=1.0.0",
        ],
    },
)
