# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="repotreemap",
    version="0.1.0",
    description="Scan a directory tree and export it as a JSON document for treemap visualizations",
    packages=find_namespace_packages(where="src", include=["repotreemap", "repotreemap.*"]),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'repotreemap=repotreemap.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
