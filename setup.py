import os
from setuptools import setup, find_packages

setup(
    name="svdbench",
    version="0.1.0",
    author="Musa Sina ERTUGRUL",
    author_email="m.s.ertugrul@gmail.com",
    description="Benchmark harness comparing standard and divide-and-conquer SVD kernels",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["svdbench", "svdbench.*", "benchmark"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=[
        "torch>=1.10.0",
        "numpy",
        "scipy>=1.5",
    ],
    extras_require={
        "dev": [
            "black",
            "pytest",
        ],
    },
)
