# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="notefolders",
    version="0.1.0",
    description="Virtual folders that group existing notes without moving them on disk",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["notefolders", "notefolders.*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'notefolders=notefolders.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
