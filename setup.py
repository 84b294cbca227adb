from setuptools import setup, find_packages

setup(
    name="mkdocs-docblock",
    version="1.0.0",
    description="MkDocs plugin rendering PHP docblocks with cross-referenced links",
    keywords="mkdocs php docblock phpdoc apigen documentation python",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "mkdocs>=1.4",
        "Markdown>=3.3",
        "MarkupSafe>=2.0",
        "Pygments>=2.12",
        "PyYAML>=5.1",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.9",
    classifiers = [
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Documentation",
        "Topic :: Software Development :: Documentation",
        "Framework :: MkDocs",
    ],
    entry_points={
        "mkdocs.plugins": [
            "docblock = mkdocs_docblock.plugin:DocblockPlugin",
        ],
    },
)
