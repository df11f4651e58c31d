"""Setup configuration for snippet-test tool."""

from setuptools import setup, find_packages

setup(
    name="snippet-test",
    version="0.1.0",
    description="Runs fenced code examples found in documentation",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "pyyaml>=6.0",
        "click>=8.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "snippet-test=snippet_test.cli:main",
        ],
    },
)
