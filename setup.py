"""
extsecret - ExternalSecret property editor
Setup configuration for installation
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_path = Path(__file__).parent / "README.md"
long_description = readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""

TEST_REQUIRES = [
    "pytest>=7.0.0",
]

setup(
    name="extsecret",
    version="0.1.0",
    author="extsecret Team",
    author_email="extsecret@example.com",
    description="Populate missing ExternalSecret properties from prompts and value templates",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: System Administrators",
        "Topic :: System :: Systems Administration",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "typer>=0.9.0",
        "rich>=13.0.0",
        "pyyaml>=6.0",
        "structlog>=23.1.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "jinja2>=3.1.0",  # Value templates
        "bcrypt>=4.0.0",  # htpasswd hashes
        "kubernetes>=28.1.0",  # Local secret store
        "urllib3>=1.26.0",  # Transport errors of the kubernetes client
    ],
    extras_require={
        "test": TEST_REQUIRES,
        "dev": TEST_REQUIRES + [
            "black>=23.0.0",
            "isort>=5.12.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "extsecret=extsecret.cli.main:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
