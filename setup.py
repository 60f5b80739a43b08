# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="snippet4ng",
    version="0.1.0",
    description="Generate Angular components, module hierarchies and Storybook stories from HTML snippet trees",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["snippet4ng*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'snippet4ng=snippet4ng.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
