# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="doctoc-watch",
    version="1.0.0",
    description="Watch files and keep a linked file list next to the doctoc table of contents",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["doctoc_watch", "doctoc_watch.*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'doctoc-watch=doctoc_watch.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
