# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="treedigest",
    version="0.1.0",
    description="Deterministic Merkle-style digest of a file or directory tree",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["treedigest*"]),
    python_requires=">=3.9",
    install_requires=[
        "blake3",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'treedigest=treedigest.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
