# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="foldervault",
    version="1.0.0",
    description="Archiving engine: build ZIP archives from files and folders and measure directory trees",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["foldervault*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'foldervault=foldervault.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
