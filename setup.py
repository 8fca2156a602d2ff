# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="assetindex",
    version="0.1.0",
    description="Flattens asset-archive index trees into path-sorted metadata manifests",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["assetindex*"]),
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'assetindex=assetindex.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
