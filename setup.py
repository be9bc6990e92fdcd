# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="dirtree",
    version="1.0.0",
    description="Level-order listing of a directory hierarchy (level:ordinal:path)",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["dirtree", "dirtree.*"]),
    package_data={
        "dirtree.interface.locales": ["*.json"],
    },
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'dirtree=dirtree.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
