import os

from setuptools import find_packages, setup

README = os.path.join(os.path.dirname(__file__), "README.md")


def readme() -> str:
    with open(README, encoding="utf-8") as f:
        return f.read()


setup(
    name="json_schema_toolkit",
    version="1.0.0",
    description="Build, encode, decode and validate JSON Schema documents, and generate test data from them",
    long_description=readme(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Testing",
        "Topic :: Text Processing",
        "Intended Audience :: Developers",
    ],
    keywords="json schema validation fuzzing property-based testing hypothesis",
    license="MIT",
    packages=find_packages(exclude=["*.tests", "*.tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "click>=8.0.0",
        "jinja2>=3.0.0",
        "hypothesis>=6.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "json_schema_toolkit=json_schema_toolkit.cli:json_schema_toolkit",
        ],
    },
    include_package_data=True,
    package_data={
        "json_schema_toolkit": ["templates/*.jinja2"],
    },
    zip_safe=False,
)
